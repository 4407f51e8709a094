# Import every model so relationship strings resolve and Base.metadata is complete.
from coaching.models.user import User
from coaching.models.batch import Batch
from coaching.models.teacher_profile import TeacherProfile
from coaching.models.parent_profile import ParentProfile
from coaching.models.student_profile import StudentProfile
from coaching.models.question_bank import QuestionBank
from coaching.models.exam import Exam
from coaching.models.question import Question
from coaching.models.test_attempt import TestAttempt
from coaching.models.answer import Answer
from coaching.models.fee_record import FeeRecord
from coaching.models.expense import Expense
from coaching.models.notice import Notice, NoticeRecipient
from coaching.models.resource import Resource
from coaching.models.enquiry import Enquiry
from coaching.models.attendance import Attendance
from coaching.models.push_subscription import PushSubscription

__all__ = [
    "User", "Batch", "TeacherProfile", "ParentProfile", "StudentProfile",
    "QuestionBank", "Exam", "Question", "TestAttempt", "Answer", "FeeRecord",
    "Expense", "Notice", "NoticeRecipient", "Resource", "Enquiry", "Attendance",
    "PushSubscription",
]
