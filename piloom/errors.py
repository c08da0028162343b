class PiloomError(Exception):
    pass


class InvalidInputError(PiloomError, ValueError):
    pass


class ResourceExhaustedError(PiloomError, MemoryError):
    pass


class ComputationCancelled(PiloomError):
    pass
