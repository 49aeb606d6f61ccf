# campusnav/app/errors.py


class CampusNavError(Exception):
    """Base exception for the service layer."""


class GraphNotFound(CampusNavError):
    """Raised when no graph artifacts exist for a campus key."""


class UnknownLocation(CampusNavError):
    """Raised when a requested node id is not part of the campus graph."""

    def __init__(self, node_id: str):
        super().__init__(f"Unknown location '{node_id}'")
        self.node_id = node_id
