class TaskValidationError(ValueError):
    """Malformed path, query or body input. Maps to 400."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskNotFoundError(LookupError):
    """No task with the requested id. Maps to 404."""

    def __init__(self, task_id: int):
        super().__init__("task not found")
        self.task_id = task_id
        self.message = "task not found"
