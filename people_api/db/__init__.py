# =============================================================================
# Database Package
# =============================================================================
# Redis client lifecycle (engine.py) and the index configuration table
# shared by both store backends (schema.py).
# =============================================================================
