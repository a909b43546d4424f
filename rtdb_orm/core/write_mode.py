from enum import Enum

class WriteMode(str, Enum):
    CONFIRM = "confirm"
    BEST_EFFORT = "best_effort"
