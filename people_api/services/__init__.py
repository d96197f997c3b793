# =============================================================================
# Services Package — Business Logic
# =============================================================================
#   - query.py: predicate value objects and the fluent PersonQuery builder
#   - store.py: pluggable store protocol (Redis, in-memory) + factory
#   - repository.py: named finders and CRUD (V1 surface)
#   - people.py: fluent query compositions (V2 surface)
#   - seed.py: demo data loader
# =============================================================================
