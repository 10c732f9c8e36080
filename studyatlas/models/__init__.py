from studyatlas.models.catalog import (
    Course,
    Lab,
    Program,
    Teacher,
    Topic,
    University,
    course_programs,
    course_topics,
    course_universities,
    lab_universities,
)
from studyatlas.models.diary import DiaryNotebook, DiaryPage, DiaryPageItem
from studyatlas.models.user import (
    CourseReview,
    CourseReviewUpvote,
    LabReview,
    LabReviewUpvote,
    SavedCourse,
    SavedLab,
    SavedProgram,
    User,
)
from studyatlas.models.workbench import AIConversation, AIMessage, EmailDraft

__all__ = [
    "AIConversation",
    "AIMessage",
    "Course",
    "CourseReview",
    "CourseReviewUpvote",
    "DiaryNotebook",
    "DiaryPage",
    "DiaryPageItem",
    "EmailDraft",
    "Lab",
    "LabReview",
    "LabReviewUpvote",
    "Program",
    "SavedCourse",
    "SavedLab",
    "SavedProgram",
    "Teacher",
    "Topic",
    "University",
    "User",
    "course_programs",
    "course_topics",
    "course_universities",
    "lab_universities",
]
