# Re-export convention types and configuration
from .types import FormatType, Quantum, Weekday
from .config import DEFAULT_CONFIG, TimesConfig
