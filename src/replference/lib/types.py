"""Stable domain identifier newtypes."""

from typing import NewType

TopicId = NewType("TopicId", str)
