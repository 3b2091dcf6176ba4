"""Messaging, settings and error types shared by the offset core."""

from .channel import *
from .exceptions import *
from .functions import *
from .settings import *
