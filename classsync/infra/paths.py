from classsync.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
PLANS_FILE = DATA_DIR / 'plans.json'
SYNC_CONFIG_FILE = DATA_DIR / 'sync_config.json'

__all__ = ['DATA_DIR', 'PLANS_FILE', 'SYNC_CONFIG_FILE']
