# main.py
import os, logging

# Ensure SDL picks a usable video driver (helps when run from terminals that default to headless)
if os.name == "nt" and not os.environ.get("SDL_VIDEODRIVER"):
    os.environ["SDL_VIDEODRIVER"] = "windows"

import pygame

from pathdemo.config import (
    WINDOW_WIDTH, WINDOW_HEIGHT, BG_COLOR, APP_TITLE, MIN_LOOKAHEAD_PX,
    load_config, pursuit_flat, ui_flat, logging_flat
)
from pathdemo.draw import draw_path, draw_followed_path, draw_label, status_lines
from pathdemo.log import setup_logger
from pathdemo.pathing import PathSession

logger = logging.getLogger("pathdemo.app")


def new_view_state(cfg):
    """Adapter-side settings that change at runtime."""
    pc = pursuit_flat(cfg)
    uc = ui_flat(cfg)
    return {
        "lookahead_px": float(pc["lookahead_px"]),
        "show_goal_lines": bool(uc["show_goal_lines"]),
        "show_trajectory": bool(uc["show_trajectory"]),
        "fps": int(uc["fps"]),
        "exhausted": False,
    }


def adjust_lookahead(view, session, steps):
    """Move the lookahead radius by whole interpolation distances."""
    view["lookahead_px"] = max(MIN_LOOKAHEAD_PX, view["lookahead_px"] + steps * session.spacing)
    logger.info("Lookahead radius %.1f px", view["lookahead_px"])


def handle_event(event, session, view):
    """Apply one pygame event; returns False when the app should quit."""
    if event.type == pygame.QUIT:
        return False

    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        elif event.key == pygame.K_r:
            session.reset()
        elif event.key == pygame.K_LEFTBRACKET:
            adjust_lookahead(view, session, -1)
        elif event.key == pygame.K_RIGHTBRACKET:
            adjust_lookahead(view, session, 1)
        elif event.key == pygame.K_g:
            view["show_goal_lines"] = not view["show_goal_lines"]

    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        session.add_control_point(event.pos)

    return True


def tick(screen, session, view, font_small=None):
    """Run one following pass and redraw everything."""
    result = session.run_pass(view["lookahead_px"])
    if result.exhausted and not view["exhausted"]:
        logger.warning("Follower stalled: lookahead %.1f px never reaches the next pose "
                       "(interpolation distance %.1f px)", view["lookahead_px"], session.spacing)
    view["exhausted"] = result.exhausted

    screen.fill(BG_COLOR)
    draw_followed_path(screen, result, view["show_goal_lines"], view["show_trajectory"])
    draw_path(screen, session.get_control_points(), session.get_path_poses())
    if font_small is not None:
        draw_label(screen, (8, 8), status_lines(session, result, view["lookahead_px"]), font_small)
    return result


def main():
    """Main application loop."""
    cfg = load_config()
    lc = logging_flat(cfg)
    setup_logger("pathdemo", level=lc["level"], log_file=lc["log_file"] or None)

    session = PathSession.from_config(cfg)
    view = new_view_state(cfg)

    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption(APP_TITLE)
    clock = pygame.time.Clock()
    font_small = pygame.font.SysFont(None, 18)
    logger.info("%s started (interpolation %.1f px, lookahead %.1f px)",
                APP_TITLE, session.spacing, view["lookahead_px"])

    running = True
    try:
        while running:
            clock.tick(view["fps"])
            tick(screen, session, view, font_small)
            pygame.display.flip()

            for event in pygame.event.get():
                if not handle_event(event, session, view):
                    running = False
    finally:
        pygame.quit()
        logger.info("%s closed", APP_TITLE)


if __name__ == "__main__":
    main()
