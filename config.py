# config.py
import os

# ======= Board catalog =======
# Simulated latency of the board catalog provider (seconds).
CATALOG_DELAY_SEC = float(os.getenv("SL_CATALOG_DELAY_SEC", "0.4"))

# ======= Logging =======
LOG_DIR      = os.getenv("SL_LOG_DIR", "logs")
ACTIVITY_LOG = os.getenv("SL_ACTIVITY_LOG", "activity.log")

# ======= Preview =======
# Pixels per board length unit in the SVG preview. Reference boards are
# 2750 units wide, so the default keeps the preview under ~700 px.
SVG_SCALE = float(os.getenv("SL_SVG_SCALE", "0.25"))

# ======= Output names =======
COORDS_OUT  = os.getenv("SL_COORDS_OUT", "coords.txt")
LAYOUT_HTML = os.getenv("SL_LAYOUT_HTML", "layout_view.html")

class CFG:
    CATALOG_DELAY_SEC = CATALOG_DELAY_SEC

    LOG_DIR      = LOG_DIR
    ACTIVITY_LOG = ACTIVITY_LOG

    SVG_SCALE = SVG_SCALE

    COORDS_OUT  = COORDS_OUT
    LAYOUT_HTML = LAYOUT_HTML

__all__ = ["CFG"]
