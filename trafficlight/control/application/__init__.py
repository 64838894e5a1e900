from .controller import IntersectionController
from .simulation import TimelineEntry, simulate_auto_cycle, format_timeline
from .builder import IntersectionBuilder
