"""Test suite for authsession.

Test structure:
- unit/: Services, domain and adapters in isolation (in-memory unit of work,
  mocked logger and event bus)
- integration/: Repositories, unit of work and full flows against in-memory
  SQLite
- utils/: Shared fakes (clock, in-memory repositories)
"""
