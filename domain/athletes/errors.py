class AthleteError(Exception):
    """Base class for everything the athlete domain raises."""


class StorageError(AthleteError):
    pass


class StorageReadError(StorageError):
    """Persisted data could not be read."""


class StorageWriteError(StorageError):
    """Persisted data could not be written (quota, disabled storage...)."""


class ValidationError(AthleteError):
    """Missing or non-numeric required fields on create or edit."""

    def __init__(self, message, fields=None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class DeleteActiveSelectionError(AthleteError):
    def __init__(self, athlete_id):
        super().__init__("You cannot delete the currently logged-in athlete.")
        self.athlete_id = athlete_id


class NotFoundError(AthleteError):
    def __init__(self, athlete_id):
        super().__init__(f"Athlete {athlete_id} not found")
        self.athlete_id = athlete_id
