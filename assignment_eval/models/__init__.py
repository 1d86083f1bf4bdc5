# 导入全部模型，保证 Base.metadata 中注册了所有表
from assignment_eval.models.assignment import Assignment  # noqa
from assignment_eval.models.submission import Submission, SubmissionStatus  # noqa
from assignment_eval.models.feedback import Feedback  # noqa
