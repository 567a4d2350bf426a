"""
Resource Name Generation.

Generates unique, length-bounded names for the resources one run
creates. Names are a fixed prefix plus random lowercase hex, so two runs
(or two calls in one run) never collide in practice.

Exports:
    random_resource_name: Prefix + random hex, exactly max_length chars
    RunNames: The four names used by one workflow run
    generate_run_names: Build RunNames from WorkflowConfig
"""

import uuid
from dataclasses import dataclass

from exceptions import ContractViolationError

# Fewer random characters than this makes collisions plausible
MIN_RANDOM_CHARS = 4


def random_resource_name(prefix: str, max_length: int) -> str:
    """
    Build a resource name from a prefix and random hex characters.

    The result is exactly max_length characters long.

    Args:
        prefix: Leading text, e.g. "rgSB01_"
        max_length: Total length of the generated name

    Returns:
        e.g. "rgSB01_3f9c0a1b7d2e4c6f" for ("rgSB01_", 24)

    Raises:
        ContractViolationError: Prefix leaves fewer than MIN_RANDOM_CHARS random characters
    """
    random_chars = max_length - len(prefix)
    if random_chars < MIN_RANDOM_CHARS:
        raise ContractViolationError(
            f"Prefix '{prefix}' leaves {random_chars} random characters in a "
            f"{max_length}-character name (need at least {MIN_RANDOM_CHARS})"
        )

    suffix = ""
    while len(suffix) < random_chars:
        suffix += uuid.uuid4().hex
    return prefix + suffix[:random_chars]


@dataclass(frozen=True)
class RunNames:
    """Names of everything one workflow run creates."""
    resource_group: str
    namespace: str
    first_queue: str
    second_queue: str


def generate_run_names(workflow_config) -> RunNames:
    """
    Generate fresh names for a run.

    Args:
        workflow_config: WorkflowConfig with prefixes and lengths

    Returns:
        RunNames with four newly generated names
    """
    return RunNames(
        resource_group=random_resource_name(
            workflow_config.resource_group_prefix, workflow_config.resource_group_length),
        namespace=random_resource_name(
            workflow_config.namespace_prefix, workflow_config.namespace_length),
        first_queue=random_resource_name(
            workflow_config.first_queue_prefix, workflow_config.first_queue_length),
        second_queue=random_resource_name(
            workflow_config.second_queue_prefix, workflow_config.second_queue_length),
    )
