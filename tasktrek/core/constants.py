"""Global constants for the TaskTrek backend."""

# Collections
USERS_COLLECTION = "users"
GROUPS_COLLECTION = "groups"
TASKS_COLLECTION = "tasks"
ACTIVITIES_COLLECTION = "activities"
SHOP_ITEMS_COLLECTION = "shopItems"

# Collections whose documents belong to a single group via "groupId"
GROUP_OWNED_COLLECTIONS = (
    TASKS_COLLECTION,
    SHOP_ITEMS_COLLECTION,
    ACTIVITIES_COLLECTION,
)

# Firestore rejects commits above 500 writes
FIRESTORE_BATCH_CEILING = 500
FIRESTORE_BATCH_LIMIT = 499

# Firestore "in" filters accept at most 30 values
MEMBER_QUERY_LIMIT = 30

# Donut chart: the caller plus this many named members, then "Other Members"
POINTS_CHART_MAX_OTHERS = 4

# Task statuses
STATUS_PENDING = "pending"
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"

# Dashboard periods
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"

# AI suggestions
AI_MODEL_NAME = "gemini-2.5-flash"
AI_TASK_HISTORY_LIMIT = 20
