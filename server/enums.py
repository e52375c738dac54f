import enum
# =========================================================
# ENUMS
# =========================================================
class TimeFormat(str, enum.Enum):
    twelve_hour = "12hr"
    twenty_four_hour = "24hr"
