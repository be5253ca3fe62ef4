"""
Policy Loader

Parses the labeler configuration document (label -> glob or list of globs)
into a Policy. Glob syntax is not validated here.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Tuple, Union

import yaml

from ..errors import ConfigurationError
from ..models.policy import Policy


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SinglePattern:
    """Label configured with one glob string."""
    pattern: str

    @property
    def patterns(self) -> List[str]:
        return [self.pattern]


@dataclass(frozen=True)
class MultiplePatterns:
    """Label configured with a list of glob strings."""
    patterns: List[str]


PolicyValue = Union[SinglePattern, MultiplePatterns]


def classify_value(label: str, value: Any) -> PolicyValue:
    """
    Classify a raw document value for one label.

    Raises:
        ConfigurationError: If the value is neither a string nor a list of
            non-empty strings
    """
    if isinstance(value, str):
        if not value:
            raise ConfigurationError(f"found empty glob for label {label}", label=label)
        return SinglePattern(value)

    if isinstance(value, list):
        if not value:
            raise ConfigurationError(f"found empty glob list for label {label}", label=label)
        for entry in value:
            if not isinstance(entry, str) or not entry:
                raise ConfigurationError(
                    f"found unexpected glob {entry!r} for label {label} (globs must be non-empty strings)",
                    label=label,
                )
        return MultiplePatterns(list(value))

    raise ConfigurationError(
        f"found unexpected type for label {label} (should be string or array of globs)",
        label=label,
    )


class PolicyYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps scalar mapping keys as the text written."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)

        mapping = {}
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise ConfigurationError(
                    f"found non-scalar label name at line {key_node.start_mark.line + 1}"
                )
            label = key_node.value
            if label in mapping:
                raise ConfigurationError(f"found duplicate label {label}", label=label)
            mapping[label] = self.construct_object(value_node, deep=deep)
        return mapping


def parse_policy(document: Any) -> Policy:
    """
    Build a Policy from a parsed configuration document.

    Args:
        document: Mapping of label name to a glob string or list of globs.
            None (an empty YAML file) gives an empty policy.

    Returns:
        Policy preserving the document's key order

    Raises:
        ConfigurationError: For non-string label names, duplicate labels, or
            any value shape other than string or list
    """
    if document is None:
        logger.warning("Labeler configuration is empty, no labels will be applied")
        return Policy()

    if not isinstance(document, Mapping):
        raise ConfigurationError(
            f"labeler configuration must be a mapping of label to globs, got {type(document).__name__}"
        )

    entries: List[Tuple[str, List[str]]] = []
    seen = set()
    for label, value in document.items():
        if not isinstance(label, str):
            raise ConfigurationError(
                f"found unexpected label name {label!r} (label names must be strings)",
                label=str(label),
            )
        if label in seen:
            raise ConfigurationError(f"found duplicate label {label}", label=label)
        seen.add(label)
        entries.append((label, classify_value(label, value).patterns))

    policy = Policy(entries)
    logger.debug(f"Loaded policy with {len(policy)} labels: {policy.labels}")
    return policy


def load_policy(content: str) -> Policy:
    """
    Parse YAML text into a Policy.

    Label names are kept exactly as written, so 'on:' or '1:' stay 'on' / '1'.

    Raises:
        ConfigurationError: On YAML syntax errors, duplicate labels or invalid values
    """
    try:
        document = yaml.load(content, Loader=PolicyYamlLoader)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid labeler configuration YAML: {e}")

    return parse_policy(document)


def load_policy_file(config_path: Union[str, Path]) -> Policy:
    """Load a Policy from a local YAML file."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Labeler configuration not found: {config_path}")

    with open(config_file, 'r', encoding='utf-8') as f:
        return load_policy(f.read())
