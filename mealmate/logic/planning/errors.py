class WorkflowStateError(Exception):
    """An operation was requested from a workflow state that does not allow it."""
