from .subscriber import MissingField, Subscriber, SubscriberForm, validate_form

__all__ = ["Subscriber", "SubscriberForm", "MissingField", "validate_form"]
