# =============================================================================
# People Search API
# =============================================================================
# A REST service over Person documents stored in Redis (RedisJSON +
# RediSearch), with exact-match, full-text, numeric-range, geo-radius and
# tag-set queries.
#
# Package structure:
#   people_api/
#   ├── api/          → FastAPI routers (v1 finders + CRUD, v2 fluent queries)
#   ├── db/           → Redis client lifecycle and index configuration table
#   ├── models/       → Pydantic V2 schemas (Person, Address, Point)
#   ├── services/     → Query builder, store backends, repository, seed data
#   ├── config.py     → Pydantic Settings
#   └── main.py       → App factory and lifespan
# =============================================================================
