"""Domain errors raised by the todo stores and the list controller."""


class TodoError(Exception):
    pass


class StoreUnavailable(TodoError):
    """A fetch or write against a store could not complete.

    Not retried. The caller's last successfully fetched view stays in place.
    """


class ValidationError(TodoError):
    """Task text was empty after trimming."""


class TaskNotFound(TodoError, LookupError):
    def __init__(self, todo_id):
        super().__init__(f"Task {todo_id} not found")
        self.todo_id = todo_id
