"""Theme colors and color utilities for the UI."""


class GameColors:
    """Dark arcade palette for the grid, timer and overlay."""

    BG_TOP = "#1b1f3a"
    BG_BOTTOM = "#0d1024"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"

    CELL = "#2a2f55"
    CELL_BORDER = "#3d4478"
    CELL_ACTIVE_BORDER = "#ffd54f"
    CELL_SAFE = "#26a69a"
    CELL_WRONG = "#e53935"
    CELL_BLINK = "#2bb36b"

    TEXT_PRIMARY = "#f5f7ff"
    TEXT_MUTED = "#9aa3c7"

    TIMER_OK = "#69f0ae"
    TIMER_WARN = "#ffb74d"
    TIMER_DANGER = "#ff5252"

    OVERLAY_CARD = "#ffffff"
    OVERLAY_FLAWLESS = "#ffd54f"


TIMER_BUCKET_COLORS = {
    "ok": GameColors.TIMER_OK,
    "warn": GameColors.TIMER_WARN,
    "danger": GameColors.TIMER_DANGER,
}


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a
