# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import ChatGenerator, build_model_client
from .types import Message, ModelParams
from .clients.echo_dev_client import EchoDevClient

__all__ = ["ChatGenerator", "Message", "ModelParams", "EchoDevClient", "build_model_client"]
