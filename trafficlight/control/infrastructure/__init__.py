from .schedulers import ThreadingScheduler, AsyncioScheduler, VirtualClockScheduler
from .display import LoggingDisplay, LampBoardDisplay
