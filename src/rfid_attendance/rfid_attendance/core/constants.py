"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORAGE_KEYS = {
    "company": "srf:company",
    "users": "srf:users",
    "employees": "srf:employees",
    "branches": "srf:branches",
    "attendance": "srf:attendance",
    "holidays": "srf:holidays",
    "settings": "srf:settings",
    "email_config": "srf:email-config",
    "cards": "srf:cards",
}

DEFAULT_GRACE_PERIOD_MINUTES = 15
DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "18:00"
DEFAULT_HALF_DAY_HOURS = 4.0
DEFAULT_FULL_DAY_HOURS = 8.0
DEFAULT_OVERTIME_AFTER_HOURS = 9.0
DEFAULT_LATE_PENALTY_PERCENT = 2.0
DEFAULT_WEEKLY_OFF = (0,)  # 0=Sunday .. 6=Saturday

DEFAULT_SALARY = 30000.0
DEFAULT_OVERTIME_RATE = 200.0
DEFAULT_WEEKLY_HOURS = 40.0
DEFAULT_DAILY_HOURS = 8.0
DEFAULT_LEAVE_COUNT = 2
DEFAULT_EMPLOYEE_PASSWORD = "emp123"

DEFAULT_BRANCH_ID = "main"
DEFAULT_BRANCH_NAME = "Main Branch"
DEFAULT_BRANCH_ADDRESS = "HQ"

DEFAULT_ADMIN_ID = "sa1"
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_NAME = "Super Admin"

DEFAULT_COMPANY_NAME = "SmartRF Attend Pro"
DEFAULT_COMPANY_ADDRESS = "123 Business Park"

SCAN_LOG_LIMIT = 50
