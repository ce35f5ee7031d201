from enum import StrEnum

class UserRole(StrEnum):
    USER = "user"
    PHARMACY = "pharmacy"
    ADMIN = "admin"

class PrescriptionStatus(StrEnum):
    PENDING = "pending"
    RESPONDED = "responded"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"

class NotificationType(StrEnum):
    """
    Known notification types. The column itself stores free text.
    """
    PHARMACY = "pharmacy"
    PRESCRIPTION_RESPONSE = "prescription_response"
    SUBSCRIPTION_APPROVED = "subscription_approved"
    SYSTEM = "system"
    TEST = "test"
