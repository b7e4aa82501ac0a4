"""Pydantic schemas for request/response validation."""

from .booking import *  # noqa: F403
from .common import *  # noqa: F403
from .contact import *  # noqa: F403
from .destination import *  # noqa: F403
from .sos import *  # noqa: F403
from .status import *  # noqa: F403
