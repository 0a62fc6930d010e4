from .event import Event
from .observable import Observable, PropertyObservable
from .subscriber_view_model import Mode, OperationFailure, SubscriberViewModel

__all__ = [
    "Event", "Observable", "PropertyObservable",
    "Mode", "OperationFailure", "SubscriberViewModel",
]
