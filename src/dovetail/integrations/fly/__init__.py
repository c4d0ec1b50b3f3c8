"""Fly.io integration backed by flyctl."""

from dovetail.integrations.fly.abc import Fly
from dovetail.integrations.fly.fake import FakeFly
from dovetail.integrations.fly.profile import FLY_PROFILE
from dovetail.integrations.fly.real import RealFly
from dovetail.integrations.fly.types import FlyApp, FlyOrg, FlyRelease

__all__ = ["FLY_PROFILE", "FakeFly", "Fly", "FlyApp", "FlyOrg", "FlyRelease", "RealFly"]
