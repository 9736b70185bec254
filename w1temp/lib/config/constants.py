"""Default values for the configuration module."""

# Where the w1 kernel driver exposes one directory per slave device
W1_DEVICES_DIR = "/sys/bus/w1/devices"
W1_SLAVE_FILE = "w1_slave"

# Registry entries are "id:name:device_id", comma-separated
DEFAULT_SENSORS = "1:ambiant:10-000802775cc7,2:rack:10-000802776315"

# Primary store first, then the fallback
DEFAULT_DB_PATHS = "temp.sqlite3,/tmp/fallback.sqlite3"

# How long SQLite waits on a write lock held by another instance
DB_BUSY_TIMEOUT_SEC = 10.0
