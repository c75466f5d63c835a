from __future__ import annotations
# config_store.py
# Loads config.yml into typed Settings and writes it back in canonical form.
# Not thread-safe: the host must serialize load()/save() calls.
import copy, logging, math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

import audit
from materials import Material, match_material
from path_helper import user_config_dir

log = logging.getLogger(__name__)

CFG_FILE = "config.yml"

DEFAULT_INITIAL_POWER = 1000.0
DEFAULT_NATURAL_DECAY = 1.0
DEFAULT_NATURAL_DECAY_INTERVAL = 5    # ticks
DEFAULT_CHARGING_INTERVAL = 20        # ticks
DEFAULT_FUEL_VALUE = 1.0              # fuel entry present but not a number

DEFAULT_FUEL_POWER: Dict[Material, float] = {
    Material.COAL: 100.0,
    Material.COAL_BLOCK: 1_000.0,
    Material.DIAMOND: 10_000.0,
    Material.DIAMOND_BLOCK: 100_000.0,
}

Resolver = Callable[[str], Optional[Material]]


class ConfigError(Exception):
    """Base class for config store failures."""

class StorageUnavailable(ConfigError):
    """The config file or its directories could not be created, read or written."""

class ConfigCorrupt(ConfigError):
    """The config file is not a well-formed YAML mapping."""


@dataclass
class Settings:
    initial_power: float = DEFAULT_INITIAL_POWER
    natural_decay: float = DEFAULT_NATURAL_DECAY
    natural_decay_interval: int = DEFAULT_NATURAL_DECAY_INTERVAL
    charging_interval: int = DEFAULT_CHARGING_INTERVAL
    fuel_power: Dict[Material, float] = field(default_factory=lambda: dict(DEFAULT_FUEL_POWER))


# ------------------ field coercion (never raises) ------------------

def _coerce_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return default
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default

def _coerce_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        try:
            return int(s)
        except ValueError:
            value = _coerce_float(s, math.nan)
    if isinstance(value, float) and math.isfinite(value):
        return int(value)   # truncates toward zero
    return default

def _format_float(value: float) -> str:
    # YAML 1.1 floats need a '.', otherwise 1e+16 would read back as a string
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    text = repr(float(value))
    if "." not in text and "e" in text:
        text = text.replace("e", ".0e", 1)
    return text


# ------------------ document level (hard fail) ------------------

def _parse_document(text: str) -> Dict[str, Any]:
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigCorrupt(f"Malformed configuration: {e}") from e
    except RecursionError as e:
        raise ConfigCorrupt("Configuration is nested too deeply") from e
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ConfigCorrupt(f"Top level is not a mapping (got {type(doc).__name__})")
    return doc


def _journal(action: str, details: Dict[str, Any], level: str = "INFO") -> None:
    # the event journal is best effort; it must not change what load()/save() report
    try:
        audit.log(action, details, level=level)
    except OSError:
        log.exception("Unable to record '%s' in the audit journal", action)


class ConfigStore:
    """
    Owns <base_dir>/config.yml and the Settings read from it.
    Settings only change through load(); accessors hand out copies.
    """

    def __init__(self, base_dir: Path | str | None = None, resolver: Resolver = match_material):
        base = Path(base_dir) if base_dir is not None else user_config_dir()
        self._path = base / CFG_FILE
        self._resolver = resolver
        self._settings = Settings()

    # ---- accessors ----
    @property
    def path(self) -> Path:
        return self._path

    @property
    def initial_power(self) -> float:
        return self._settings.initial_power

    @property
    def natural_decay(self) -> float:
        return self._settings.natural_decay

    @property
    def natural_decay_interval(self) -> int:
        return self._settings.natural_decay_interval

    @property
    def charging_interval(self) -> int:
        return self._settings.charging_interval

    @property
    def fuel_power(self) -> Dict[Material, float]:
        return dict(self._settings.fuel_power)

    @property
    def settings(self) -> Settings:
        return copy.deepcopy(self._settings)

    # ---- file ----
    def ensure_file(self) -> None:
        """Create the config file, and any missing parent folders, if absent."""
        if self._path.exists():
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch()
        except OSError as e:
            raise StorageUnavailable(f"Unable to create configuration file {self._path}") from e

    def load(self) -> None:
        try:
            self.ensure_file()
            try:
                with open(self._path, "r", encoding="utf-8") as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise StorageUnavailable(f"Unable to read {self._path}") from e
            settings = self._read(_parse_document(text))
        except ConfigError as e:
            _journal("config_load_fail", {"path": str(self._path), "error": str(e)}, level="ERROR")
            raise
        self._settings = settings
        log.info("Loaded configuration from %s", self._path)
        _journal("config_load", {"path": str(self._path), "fuel_entries": len(settings.fuel_power)})

    def _read(self, doc: Dict[str, Any]) -> Settings:
        settings = Settings(
            initial_power=_coerce_float(doc.get("initialPower"), DEFAULT_INITIAL_POWER),
            natural_decay=_coerce_float(doc.get("naturalDecay"), DEFAULT_NATURAL_DECAY),
            natural_decay_interval=_coerce_int(doc.get("naturalDecayInterval"), DEFAULT_NATURAL_DECAY_INTERVAL),
            charging_interval=_coerce_int(doc.get("chargingInterval"), DEFAULT_CHARGING_INTERVAL),
            fuel_power=dict(self._settings.fuel_power),
        )
        section = doc.get("fuelPower")
        if isinstance(section, dict):
            settings.fuel_power.clear()
            for key, value in section.items():
                m = self._resolver(str(key))
                if m is None:
                    log.warning("Unknown material '%s', ignored!", key)
                    _journal("fuel_material_unknown", {"key": str(key)}, level="WARNING")
                    continue
                settings.fuel_power[m] = _coerce_float(value, DEFAULT_FUEL_VALUE)
        return settings

    def save(self) -> None:
        try:
            self.ensure_file()
            content = self.render()
            try:
                with open(self._path, "w", encoding="utf-8") as f:
                    f.write(content)
            except OSError as e:
                raise StorageUnavailable(f"Unable to write {self._path}") from e
        except ConfigError as e:
            _journal("config_save_fail", {"path": str(self._path), "error": str(e)}, level="ERROR")
            raise
        log.info("Saved configuration to %s", self._path)
        _journal("config_save", {"path": str(self._path)})

    def render(self) -> str:
        """Canonical text of the current settings."""
        s = self._settings
        out = [
            f"initialPower: {_format_float(s.initial_power)}",
            "",
            f"naturalDecay: {_format_float(s.natural_decay)}",
            f"naturalDecayInterval: {s.natural_decay_interval}",
            "",
            f"chargingInterval: {s.charging_interval}",
            "",
        ]
        if s.fuel_power:
            out.append("fuelPower:")
            order = list(Material)
            for m in sorted(s.fuel_power, key=order.index):
                out.append(f"  {m.name}: {_format_float(s.fuel_power[m])}")
        else:
            # a bare 'fuelPower:' reads back as absent and would keep the old map
            out.append("fuelPower: {}")
        out.append("")
        return "\n".join(out) + "\n"
