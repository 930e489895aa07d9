class DentalCenterError(Exception):
    """Base class for domain errors raised by the service layer."""


class OrphanedIncidentError(DentalCenterError):
    def __init__(self, patient_id: str, incident_id: str | None = None):
        self.patient_id = patient_id
        self.incident_id = incident_id
        super().__init__(f"Incident references unknown patient: {patient_id}")


class InvalidAttachmentError(DentalCenterError):
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Attachment {name!r} is invalid: {reason}")
