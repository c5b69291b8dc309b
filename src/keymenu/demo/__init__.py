"""National parks sample application built on keymenu."""

from .dao import ParkDao
from .menus import MainMenu, run_demo
from .models import Park

__all__ = ["MainMenu", "Park", "ParkDao", "run_demo"]
