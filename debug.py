# debug.py
from __future__ import annotations
import logging
from typing import Dict, Iterable

LOGGER_NAME = "ENIGMA"

# every module-level Debug() starts with all of these switched off
COMPONENTS = (
    "rotor",        # offset changes
    "stepping",     # wheel positions after each key press
    "plugboard",    # slot changes
    "encipher",     # letter in -> letter out
    "scoring",      # same-key match rates
    "search",       # phase 1 survivors and pool progress
    "hillclimb",    # phase 2 slot winners
    "loader",       # frequency tables and message files
)


class Debug:
    _root_configured: bool = False          # basicConfig runs once per process
    _instances: list["Debug"] = []

    def __init__(self, *, log_to: str | None = None, level: int = logging.INFO) -> None:
        """
        One Debug per module; they all share the ENIGMA logger.
        `log_to` adds a file handler the first time logging is configured.
        """
        if not Debug._root_configured:
            handlers: list[logging.Handler] = [logging.StreamHandler()]
            if log_to:
                handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

            logging.basicConfig(
                level=level,
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                handlers=handlers,
            )
            Debug._root_configured = True

        self.logger = logging.getLogger(LOGGER_NAME)
        self.enabled = True        # global switch
        self.components: Dict[str, bool] = dict.fromkeys(COMPONENTS, False)
        Debug._instances.append(self)

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        """Detail line, emitted only while *component* is switched on."""
        if self.enabled and self.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def info(self, component: str, message: str) -> None:
        """Progress report; ignores the component toggles."""
        if self.enabled:
            self.logger.info("[%s] %s", component.upper(), message)

    def warning(self, component: str, message: str) -> None:
        self.logger.warning("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    # ── process-wide setup ───────────────────────────────────────
    @classmethod
    def configure(cls, *, verbose: Iterable[str] = (), log_file: str | None = None) -> None:
        """Switch *verbose* components on in every module and drop to DEBUG.

        With *log_file*, log lines are also appended to that file.
        """
        logger = logging.getLogger(LOGGER_NAME)
        if log_file:
            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setFormatter(logging.Formatter(
                "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            logger.addHandler(handler)
        verbose = tuple(verbose)
        if verbose:
            logger.setLevel(logging.DEBUG)
            for inst in cls._instances:
                inst.enable(*verbose)

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"
