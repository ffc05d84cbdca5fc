"""
Exceptions raised at the advisor's request and backend boundaries.
The scoring calculators themselves never raise for validated input.
"""


class AdvisorError(Exception):
    """Base class for errors that turn into a failed advisor response."""


class InvalidRequestError(AdvisorError):
    """The request body is missing a required field."""


class AthleteNotFoundError(AdvisorError):
    """No athlete exists for the requested id."""

    def __init__(self, athlete_id: str):
        super().__init__("Athlete not found")
        self.athlete_id = athlete_id


class DealNotFoundError(AdvisorError):
    """No deal exists for the requested id."""

    def __init__(self, deal_id: str):
        super().__init__("Deal not found")
        self.deal_id = deal_id


class BackendError(AdvisorError):
    """The data backend could not be reached or returned an error."""
