class TaskTrackerError(Exception):
    """Base error raised by the task store"""

    kind = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTaskError(TaskTrackerError):
    kind = "invalid_argument"
    status_code = 400


class TaskNotFoundError(TaskTrackerError):
    kind = "not_found"
    status_code = 404

    def __init__(self, task_id: str):
        super().__init__("Task not found")
        self.task_id = task_id
