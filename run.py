import logging
import sys

from pathtrim.app import PathViewerApp
from pathtrim.settings import load_settings, DEFAULTS_PATH

def main():
    cfg = load_settings(DEFAULTS_PATH)
    # Paths given on the command line replace the configured samples
    if len(sys.argv) > 1:
        cfg.paths = sys.argv[1:]
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = PathViewerApp(cfg)
    app.run()

if __name__ == "__main__":
    main()
