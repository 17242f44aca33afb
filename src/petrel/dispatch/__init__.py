"""Request dispatch — explicit route table, method dispatch, error mapping."""

from petrel.dispatch.cors import CORSConfig
from petrel.dispatch.dispatcher import Dispatcher
from petrel.dispatch.negotiation import negotiate

__all__ = ["CORSConfig", "Dispatcher", "negotiate"]
