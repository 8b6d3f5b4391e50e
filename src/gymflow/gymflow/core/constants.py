"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

UNASSIGNED_ID = 0

CSV_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_IMPORT_FILE_BYTES = 10 * 1024 * 1024
CSV_EXTENSION = ".csv"

WORKOUT_CSV_HEADER = (
    "Title,Description,Difficulty,MuscleGroup,WorkoutType,DurationMinutes,"
    "EquipmentNeeded,TargetSets,TargetReps,RestSeconds,MemberId,TrainerId,CreatedAt"
)
WORKOUT_CSV_MIN_FIELDS = 13

ATTENDANCE_CSV_HEADER = "MemberId,SessionId,Attended"
ATTENDANCE_CSV_MIN_FIELDS = 3
NAMED_ATTENDANCE_CSV_HEADER = "MemberId,MemberName,SessionId,ClassName,Attended"

DEFAULT_EXPORT_DIR = "exports"
