from models.event import InputEvent, LaunchEvent, LaunchTarget, LogEvent
from models.alias import Alias, AliasUpdate
from models.analysis import AnalysisResponse, ExtensionHint, Proposal
from models.log_file import LogFileInfo

__all__ = [
    "InputEvent", "LaunchEvent", "LaunchTarget", "LogEvent",
    "Alias", "AliasUpdate",
    "AnalysisResponse", "ExtensionHint", "Proposal",
    "LogFileInfo",
]
