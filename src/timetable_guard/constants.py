"""Constants for timetable validation."""

# Institution operating window
OPENING_TIME = "08:00"
CLOSING_TIME = "20:00"

# Supported week numbers for week-range bulk generation
MIN_WEEK = 1
MAX_WEEK = 16

# Standard 90-minute pairs
DEFAULT_TIME_SLOTS = [
    "08:00-09:30",
    "09:40-11:10",
    "11:20-12:50",
    "13:20-14:50",
    "15:00-16:30",
    "16:40-18:10",
    "18:20-19:50",
]

MINUTES_PER_DAY = 24 * 60

# Pattern for 24-hour times; "24:00" is accepted as end of day
TIME_PATTERN = r"^(?:[01]?\d|2[0-3]):[0-5]\d$|^24:00$"

ERROR_MESSAGES = {
    "end_before_start": "End time must be after start time",
    "outside_hours": "Lesson time must be within operating hours ({opening}-{closing})",
    "room": "Room conflict: {room} is already booked at this time",
    "teacher": "Teacher is already scheduled for another lesson at this time",
    "room_other": "Room conflict with another schedule: {room} is already booked",
    "teacher_other": "Teacher is already scheduled in another group at this time",
}
