"""Loading, validating and saving the JSON configuration file, plus command-line overrides."""
import argparse
import json
import logging
from numbers import Number

from constants import CONFIG_FILE, DEFAULT_CONFIG

logger = logging.getLogger(__name__)

THEME_NAMES = ("hivemind", "crt")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
THRESHOLD_KEYS = ("cpu_thresholds", "memory_thresholds", "temperature_thresholds", "fps_thresholds")
POSITIVE_INT_KEYS = ("poll_interval_ms", "history_points")


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _valid_pair(value):
    # (warn_at, danger_at), warn strictly below danger
    return (isinstance(value, (list, tuple)) and len(value) == 2
            and all(isinstance(v, Number) and not isinstance(v, bool) for v in value)
            and value[0] < value[1])


def _fallback(config, key):
    logger.warning("Invalid %s %r, using %r", key, config.get(key), DEFAULT_CONFIG[key])
    config[key] = DEFAULT_CONFIG[key]


def validate_config(config):
    """Replace invalid values with their defaults, in place. Returns the config."""
    for key in POSITIVE_INT_KEYS:
        if not _is_int(config.get(key)) or config[key] <= 0:
            _fallback(config, key)
    # A polyline needs at least two points
    if config["history_points"] < 2:
        _fallback(config, "history_points")

    for key in THRESHOLD_KEYS:
        if not _valid_pair(config.get(key)):
            _fallback(config, key)
            config[key] = list(config[key])

    if config.get("chart_theme") not in THEME_NAMES:
        logger.warning("Unknown chart theme %r, using %r", config.get("chart_theme"), DEFAULT_CONFIG["chart_theme"])
        config["chart_theme"] = DEFAULT_CONFIG["chart_theme"]

    if not _is_int(config.get("monitor_index")) or config["monitor_index"] < 0:
        _fallback(config, "monitor_index")
    if not isinstance(config.get("colorblind_mode"), bool):
        _fallback(config, "colorblind_mode")
    if not isinstance(config.get("provider_module"), str) or not config["provider_module"].strip():
        _fallback(config, "provider_module")

    level = config.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        config["log_level"] = level.upper()
    else:
        _fallback(config, "log_level")
    return config


def load_config(path=CONFIG_FILE):
    """Reads the configuration from the JSON file, merged over the defaults."""
    config = json.loads(json.dumps(DEFAULT_CONFIG))
    try:
        with open(path, "r") as f:
            content = f.read().strip()
    except FileNotFoundError:
        return config  # Use defaults
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return config

    try:
        loaded_config = json.loads(content)
        if isinstance(loaded_config, dict):
            config.update(loaded_config)
        elif _is_int(loaded_config):
            # Old format: just monitor index
            config["monitor_index"] = loaded_config
        else:
            logger.warning("Ignoring unexpected config content in %s", path)
    except json.JSONDecodeError:
        # Old format: just monitor index (plain text)
        try:
            config["monitor_index"] = int(content)
        except ValueError:
            logger.warning("Ignoring unreadable config file %s", path)
    return validate_config(config)


def save_config(config, path=CONFIG_FILE):
    """Saves the config dictionary to the JSON file."""
    with open(path, "w") as f:
        json.dump(config, f, indent=2)
    logger.info("Configuration saved to %s", path)


def ensure_config(path=CONFIG_FILE):
    """First launch: write the defaults if no file exists yet, then load."""
    try:
        with open(path, "x") as f:
            json.dump(DEFAULT_CONFIG, f, indent=2)
        logger.info("Default configuration created at %s", path)
    except FileExistsError:
        pass
    except OSError as e:
        logger.warning("Could not create default config: %s", e)
    return load_config(path)


def thresholds_from_config(config):
    return {
        "cpu": tuple(config["cpu_thresholds"]),
        "memory": tuple(config["memory_thresholds"]),
        "temperature": tuple(config["temperature_thresholds"]),
    }


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="HIVEMIND hardware dashboard")
    parser.add_argument("--config", default=CONFIG_FILE)
    parser.add_argument("--provider", help="module exposing invoke(command)")
    parser.add_argument("--theme", choices=THEME_NAMES)
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS)
    parser.add_argument("--terminal", action="store_true", help="console mode, no window")
    parser.add_argument("--diagnose", action="store_true", help="probe the provider and exit")
    return parser.parse_args(argv)


def apply_overrides(config, args):
    """Command-line flags win over the file."""
    if args.provider:
        config["provider_module"] = args.provider
    if args.theme:
        config["chart_theme"] = args.theme
    if args.log_level:
        config["log_level"] = args.log_level
    return config
