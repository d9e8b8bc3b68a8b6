# config.py
import os

# ======= Worker / search caps =======
WORKERS         = int(os.getenv("PP_WORKERS", "1"))
NODE_LIMIT      = int(os.getenv("PP_NODE_LIMIT", "0"))      # rows tried per region, 0 = unlimited
TIME_LIMIT      = float(os.getenv("PP_TIME_LIMIT", "0"))    # seconds per region, 0 = unlimited
RECURSION_LIMIT = int(os.getenv("PP_RECURSION_LIMIT", "10000"))

# ======= Input =======
# Side length every shape block must have; 0 accepts any rectangle.
SHAPE_SIZE = int(os.getenv("PP_SHAPE_SIZE", "3"))

# ======= Logging =======
LOG_LEVEL = os.getenv("PP_LOG_LEVEL", "INFO").upper()

# ======= Viewer =======
CELL_SIZE = int(os.getenv("PP_CELL_SIZE", "48"))  # max pixels per grid cell


class CFG:
    WORKERS         = WORKERS
    NODE_LIMIT      = NODE_LIMIT
    TIME_LIMIT      = TIME_LIMIT
    RECURSION_LIMIT = RECURSION_LIMIT

    SHAPE_SIZE = SHAPE_SIZE

    LOG_LEVEL = LOG_LEVEL

    CELL_SIZE = CELL_SIZE


__all__ = ["CFG"]
