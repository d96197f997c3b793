# =============================================================================
# API Package — FastAPI Route Handlers
# =============================================================================
#   - people_v1.py: repository-backed finders + CRUD (/api/v1/people)
#   - people_v2.py: fluent query service, read-only (/api/v2/people)
#   - deps.py: store/repository/service dependencies
#   - request_log.py: per-request logging middleware
# =============================================================================
