"""
diagnostics.py
Connection checks for the Azure directory, the language model and the prompts.
"""

import logging
from dataclasses import dataclass, field
from itertools import islice
from typing import List

from azure_explorer.config import Settings
from azure_explorer.constants import QUERY_ANALYZER_PROMPT, RESPONSE_GENERATOR_PROMPT
from azure_explorer.context import PipelineContext

logger = logging.getLogger(__name__)

# How many resource groups to show in the directory check
SAMPLE_GROUP_COUNT = 5


@dataclass
class CheckResult:
    name: str
    ok: bool
    detail: str


@dataclass
class ConnectionReport:
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(check.ok for check in self.checks)

    def summary(self) -> str:
        lines = [f"{'OK ' if c.ok else 'FAIL'} {c.name}: {c.detail}" for c in self.checks]
        return "\n".join(lines)


def check_settings(settings: Settings) -> CheckResult:
    missing = settings.missing_required()
    if missing:
        return CheckResult("settings", False, f"Missing: {', '.join(missing)}")
    return CheckResult("settings", True, "All required environment variables are set")


def check_directory(context: PipelineContext) -> CheckResult:
    try:
        names = [rg["name"] for rg in context.directory.list_resource_groups()]
    except Exception as e:
        logger.error(f"Azure directory check failed: {e}")
        return CheckResult("azure", False, f"Could not list resource groups: {e}")

    sample = ", ".join(islice(names, SAMPLE_GROUP_COUNT))
    return CheckResult("azure", True, f"Found {len(names)} resource group(s): {sample}")


def check_prompts(context: PipelineContext) -> CheckResult:
    try:
        for name in (QUERY_ANALYZER_PROMPT, RESPONSE_GENERATOR_PROMPT):
            context.prompt_store.load(name)
    except Exception as e:
        return CheckResult("prompts", False, str(e))
    return CheckResult("prompts", True, "Prompt templates loaded")


def check_language_model(context: PipelineContext) -> CheckResult:
    try:
        reply = context.llm.complete(
            "You are a connectivity check. Reply with the single word OK.",
            "Are you there?",
            temperature=0.0,
            max_tokens=5,
        )
    except Exception as e:
        logger.error(f"Language model check failed: {e}")
        return CheckResult("language model", False, str(e))
    return CheckResult("language model", True, f"Model replied: {reply}")


def check_connection(context: PipelineContext) -> ConnectionReport:
    """Run every check; a failing check is recorded, never raised."""
    report = ConnectionReport()
    report.checks.append(check_settings(context.settings))
    report.checks.append(check_prompts(context))
    report.checks.append(check_directory(context))
    report.checks.append(check_language_model(context))

    for check in report.checks:
        log = logger.info if check.ok else logger.warning
        log(f"Connection check {check.name}: {check.detail}")

    return report
