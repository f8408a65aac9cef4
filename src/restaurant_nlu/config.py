"""
Configuration module for the restaurant NLU pipeline

Configuration is grouped into dataclass sections and can be loaded from a YAML
file (with ``${VAR:-default}`` environment substitution), from environment
variables, or from a plain dictionary.
"""
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = "RESTAURANT_NLU_CONFIG"
DEFAULT_CONFIG_PATH = "config/config.yml"

SPELLING_POLICY_SYMMETRIC = "symmetric"
SPELLING_POLICY_TRAINING_ONLY = "training_only"
SPELLING_POLICIES = (SPELLING_POLICY_SYMMETRIC, SPELLING_POLICY_TRAINING_ONLY)


def _default_validation_examples() -> List[Dict[str, str]]:
    return [
        {"label": "Greeting", "text": "Hi"},
        {"label": "Goodbye", "text": "bye bye"},
    ]


@dataclass
class PathsConfig:
    """Locations of corpora, dictionaries and persisted models"""
    intents_file: str = "data/ghms-restaurant.json"
    entities_file: str = "data/ghms-restaurant-ner.json"
    dictionary_file: str = "data/dictionary/en_base.dic"
    affix_file: str = "data/dictionary/en_base.aff"
    domain_words_file: Optional[str] = None
    classifier_model_path: str = "data/models/intent-classifier.joblib"
    spotter_model_path: str = "data/models/entity-spotter.joblib"


@dataclass
class SpellingConfig:
    """Spelling correction configuration"""
    policy: str = SPELLING_POLICY_SYMMETRIC
    max_suggestions: int = 3
    max_distance: int = 3


@dataclass
class ClassifierConfig:
    """Intent classifier training configuration"""
    max_iterations: int = 20000
    l1_regularization: float = 1e-4
    l2_regularization: float = 1e-4
    tolerance: float = 1e-8
    history_size: int = 10
    enforce_non_negativity: bool = True
    word_ngram_length: int = 1
    char_ngram_length: int = 3
    validation_examples: List[Dict[str, str]] = field(default_factory=_default_validation_examples)


@dataclass
class SpotterConfig:
    """Entity spotter configuration"""
    language_model: Optional[str] = "en_core_web_sm"


@dataclass
class RouterConfig:
    """Dispatch router configuration"""
    confidence_threshold: float = 0.49
    fallback_message: str = "Sorry, I didn't understand that. How can I help you?"
    history_capacity: int = 1000


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    use_json: bool = False
    log_to_console: bool = True
    log_to_file: bool = False
    dir: str = "logs"
    file: str = "restaurant-nlu.log"


@dataclass
class NLUConfig:
    """Main configuration"""
    service_name: str = "restaurant-nlu"
    paths: PathsConfig = None
    spelling: SpellingConfig = None
    classifier: ClassifierConfig = None
    spotter: SpotterConfig = None
    router: RouterConfig = None
    logging: LoggingConfig = None

    def __post_init__(self):
        if self.paths is None:
            self.paths = PathsConfig()
        if self.spelling is None:
            self.spelling = SpellingConfig()
        if self.classifier is None:
            self.classifier = ClassifierConfig()
        if self.spotter is None:
            self.spotter = SpotterConfig()
        if self.router is None:
            self.router = RouterConfig()
        if self.logging is None:
            self.logging = LoggingConfig()

        if self.spelling.policy not in SPELLING_POLICIES:
            raise ConfigurationError(
                f"Unknown spelling policy '{self.spelling.policy}', "
                f"expected one of {', '.join(SPELLING_POLICIES)}"
            )
        if not 0.0 <= self.router.confidence_threshold <= 1.0:
            raise ConfigurationError(
                f"Confidence threshold must be within [0, 1], got {self.router.confidence_threshold}"
            )


def _build_section(section_cls, data: Optional[Dict[str, Any]]):
    """Build a dataclass section from a dictionary, ignoring unknown keys"""
    data = data or {}
    known = {f.name for f in fields(section_cls)}
    unknown = set(data) - known
    if unknown:
        logger.warning(f"Ignoring unknown {section_cls.__name__} keys: {sorted(unknown)}")
    return section_cls(**{key: value for key, value in data.items() if key in known})


def load_config_from_dict(config_dict: Dict[str, Any]) -> NLUConfig:
    """
    Load configuration from a dictionary

    Args:
        config_dict: Configuration dictionary

    Returns:
        NLUConfig instance
    """
    try:
        return NLUConfig(
            service_name=config_dict.get("service_name", "restaurant-nlu"),
            paths=_build_section(PathsConfig, config_dict.get("paths")),
            spelling=_build_section(SpellingConfig, config_dict.get("spelling")),
            classifier=_build_section(ClassifierConfig, config_dict.get("classifier")),
            spotter=_build_section(SpotterConfig, config_dict.get("spotter")),
            router=_build_section(RouterConfig, config_dict.get("router")),
            logging=_build_section(LoggingConfig, config_dict.get("logging")),
        )
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config_from_env() -> NLUConfig:
    """
    Load configuration from environment variables

    Returns:
        NLUConfig instance with values from environment
    """
    paths_config = PathsConfig(
        intents_file=os.getenv("NLU_INTENTS_FILE", "data/ghms-restaurant.json"),
        entities_file=os.getenv("NLU_ENTITIES_FILE", "data/ghms-restaurant-ner.json"),
        dictionary_file=os.getenv("NLU_DICTIONARY_FILE", "data/dictionary/en_base.dic"),
        affix_file=os.getenv("NLU_AFFIX_FILE", "data/dictionary/en_base.aff"),
        domain_words_file=os.getenv("NLU_DOMAIN_WORDS_FILE") or None,
        classifier_model_path=os.getenv("NLU_CLASSIFIER_MODEL_PATH", "data/models/intent-classifier.joblib"),
        spotter_model_path=os.getenv("NLU_SPOTTER_MODEL_PATH", "data/models/entity-spotter.joblib"),
    )

    spelling_config = SpellingConfig(
        policy=os.getenv("NLU_SPELLING_POLICY", SPELLING_POLICY_SYMMETRIC),
        max_suggestions=int(os.getenv("NLU_SPELLING_MAX_SUGGESTIONS", "3")),
        max_distance=int(os.getenv("NLU_SPELLING_MAX_DISTANCE", "3")),
    )

    classifier_config = ClassifierConfig(
        max_iterations=int(os.getenv("NLU_CLASSIFIER_MAX_ITERATIONS", "20000")),
        l1_regularization=float(os.getenv("NLU_CLASSIFIER_L1", "0.0001")),
        l2_regularization=float(os.getenv("NLU_CLASSIFIER_L2", "0.0001")),
    )

    spotter_config = SpotterConfig(
        language_model=os.getenv("NLU_SPOTTER_LANGUAGE_MODEL", "en_core_web_sm") or None,
    )

    router_config = RouterConfig(
        confidence_threshold=float(os.getenv("NLU_CONFIDENCE_THRESHOLD", "0.49")),
        history_capacity=int(os.getenv("NLU_HISTORY_CAPACITY", "1000")),
    )

    logging_config = LoggingConfig(
        level=os.getenv("NLU_LOG_LEVEL", "INFO"),
        use_json=os.getenv("NLU_LOG_JSON", "false").lower() == "true",
        log_to_file=os.getenv("NLU_LOG_TO_FILE", "false").lower() == "true",
        dir=os.getenv("NLU_LOG_DIR", "logs"),
    )

    return NLUConfig(
        service_name=os.getenv("NLU_SERVICE_NAME", "restaurant-nlu"),
        paths=paths_config,
        spelling=spelling_config,
        classifier=classifier_config,
        spotter=spotter_config,
        router=router_config,
        logging=logging_config,
    )


def _resolve_env_vars(value: str) -> str:
    """Resolve ``${VAR:default}`` and ``${VAR:-default}`` references"""
    if not isinstance(value, str):
        return value

    pattern = re.compile(r'\${([^}:]+)(?::(-?)([^}]*?))?}')

    def replace_var(match):
        var_name, dash, default = match.groups()
        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        return default if default is not None else ""

    return pattern.sub(replace_var, value)


def _convert_scalar(value: str) -> Any:
    """Convert a resolved string to int, float, bool or None where it looks like one"""
    if value.isdigit():
        return int(value)
    if value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    if value.lower() in ('null', 'none', '~'):
        return None
    try:
        return float(value)
    except ValueError:
        return value


def _resolve_value(value: Any) -> Any:
    if isinstance(value, dict):
        return _resolve_dict(value)
    if isinstance(value, list):
        return [_resolve_value(item) for item in value]
    if isinstance(value, str):
        resolved_value = _resolve_env_vars(value)
        # Only substituted values are type-converted
        if resolved_value != value:
            return _convert_scalar(resolved_value)
        return resolved_value
    return value


def _resolve_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively resolve environment variables in a configuration dictionary"""
    return {key: _resolve_value(value) for key, value in data.items()}


def _get_config_path() -> Path:
    return Path(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))


def load_config_file(config_path: Optional[str] = None) -> NLUConfig:
    """
    Load configuration from a YAML file

    Args:
        config_path: Path to the YAML file; defaults to $RESTAURANT_NLU_CONFIG
            or config/config.yml

    Returns:
        NLUConfig instance; defaults are used when the file does not exist
    """
    path = Path(config_path) if config_path else _get_config_path()
    if not path.exists():
        if config_path:
            raise ConfigurationError(f"Configuration file not found: {path}")
        logger.warning(f"Configuration file not found: {path}, using defaults")
        return NLUConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed configuration file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    config = load_config_from_dict(_resolve_dict(raw))
    logger.info(f"Loaded configuration from {path}")
    return config


def get_config(config_path: Optional[str] = None) -> NLUConfig:
    """
    Get the current configuration, preferring the YAML file

    Returns:
        NLUConfig instance
    """
    return load_config_file(config_path)
