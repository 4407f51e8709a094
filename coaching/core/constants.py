from enum import Enum


class RoleEnum(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    PARENT = "PARENT"
    SECURITY_ADMIN = "SECURITY_ADMIN"

ADMIN_ROLES = (RoleEnum.SUPER_ADMIN, RoleEnum.TEACHER)
SECURITY_ROLES = (RoleEnum.SUPER_ADMIN, RoleEnum.SECURITY_ADMIN)

class AttemptStatusEnum(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    EVALUATED = "EVALUATED"

TERMINAL_ATTEMPT_STATUSES = (AttemptStatusEnum.SUBMITTED, AttemptStatusEnum.EVALUATED)

class StudentExamStatusEnum(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    EVALUATED = "EVALUATED"

class NoticeTargetEnum(str, Enum):
    GLOBAL = "GLOBAL"
    BATCH = "BATCH"
    STUDENT = "STUDENT"
    PARENT = "PARENT"

class EnquiryStatusEnum(str, Enum):
    PENDING = "PENDING"
    CALLED = "CALLED"
    ADMITTED = "ADMITTED"
    CLOSED = "CLOSED"

class DifficultyEnum(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

# Question import defaults
DEFAULT_QUESTION_MARKS = 4
DEFAULT_QUESTION_NEGATIVE = -1
DEFAULT_SUBJECT = "General"
DEFAULT_TOPIC = "General"
DEFAULT_DIFFICULTY = DifficultyEnum.MEDIUM.value
DEFAULT_QUESTION_TYPE = "SINGLE"
DEFAULT_CORRECT_OPTION = "a"

DEFAULT_PAYMENT_MODE = "CASH"
DEFAULT_FEE_REMARKS = "Fee Payment"
MASKED_MOBILE_SUFFIX = "*******"

# Subject buckets used when aggregating attempt scores.
# Order matters: the first matching keyword wins.
SUBJECT_BUCKETS = (
    ("physics", "physics"),
    ("chemistry", "chemistry"),
    ("math", "maths"),
    ("biology", "biology"),
)
