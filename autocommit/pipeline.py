"""Pipeline - status text in, commit message out.

The pipeline never talks to git or a provider directly. The caller hands it
the status report, a callable that returns one file's diff, and a factory
that builds an LLM client from a credential. Every failure past
classification degrades to a fallback message instead of raising.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from autocommit.config import Config, CredentialAbsent, CredentialPresent, resolve_credential
from autocommit.git.diff_summary import DiffSummary, summarize_diff
from autocommit.git.ranking import rank_files
from autocommit.git.repository import DIFF_UNAVAILABLE, GitError
from autocommit.git.status import ChangeSet, classify_changes
from autocommit.llm import LLMClient, LLMError, get_client, request_explanation
from autocommit.message.composer import CommitMessage, ComposeMode, compose_message, fallback_message
from autocommit.message.title import compose_title
from autocommit.prompts.builder import ExplanationPromptBuilder, PromptConfig
from autocommit.result import Failure, Ok, Result

DiffSource = Callable[[str], str]
ClientFactory = Callable[[Config, CredentialPresent], LLMClient]


@dataclass(frozen=True)
class NoChanges:
    """Nothing A/M/D in the status report."""


@dataclass(frozen=True)
class Generated:
    """A message is ready. `notice`/`error` explain any fallback taken."""
    message: CommitMessage
    changes: ChangeSet = field(default_factory=ChangeSet)
    notice: Optional[str] = None
    explanation_error: Optional[str] = None
    error: Optional[str] = None
    prompt: str = ""
    tokens_used: int = 0
    timings: dict = field(default_factory=dict)


PipelineOutcome = Union[NoChanges, Generated]


def default_client_factory(config: Config, credential: CredentialPresent) -> LLMClient:
    return get_client(config.provider, api_key=credential.value, model=config.model, timeout=config.timeout)


def fetch_diffs(paths: tuple[str, ...], diff_source: DiffSource) -> dict[str, str]:
    """Diff text per path, one at a time, in the order given.

    A GitError on one file only costs that file its diff.
    """
    diffs = {}
    for path in paths:
        try:
            diffs[path] = diff_source(path)
        except GitError:
            diffs[path] = DIFF_UNAVAILABLE
    return diffs


def explain(config: Config, credential: CredentialPresent, prompt: str,
            client_factory: ClientFactory) -> tuple[Result[str], int]:
    """Explanation text and tokens used. Client setup errors are Failures too."""
    try:
        client = client_factory(config, credential)
    except LLMError as e:
        return Failure(str(e)), 0

    response = request_explanation(client, prompt)
    if isinstance(response, Failure):
        return response, 0
    return Ok(response.value.content), response.value.tokens_used


def _run(status: str, diff_source: DiffSource, config: Config, client_factory: ClientFactory,
         hint: Optional[str], environ: Optional[dict]) -> PipelineOutcome:
    timings = {}
    t0 = time.time()
    changes = classify_changes(status)
    if changes.is_empty:
        return NoChanges()

    ranked = rank_files(changes.flatten(), limit=config.max_ranked_files)
    title = compose_title(changes, ranked, max_length=config.max_subject_length)
    timings['classify'] = time.time() - t0

    credential = resolve_credential(config, environ)
    if isinstance(credential, CredentialAbsent):
        return Generated(message=fallback_message(), changes=changes, notice=credential.reason, timings=timings)

    t0 = time.time()
    diffs = fetch_diffs(changes.modified, diff_source)
    summaries: dict[str, DiffSummary] = {path: summarize_diff(text) for path, text in diffs.items()}
    timings['diff'] = time.time() - t0

    prompt = ExplanationPromptBuilder().build(summaries, PromptConfig(hint=hint), changes=changes)

    t0 = time.time()
    explanation, tokens_used = explain(config, credential, prompt, client_factory)
    timings['generate'] = time.time() - t0

    message = compose_message(
        title,
        explanation,
        diffs=diffs,
        mode=ComposeMode(config.mode),
        changes=changes,
        max_subject_length=config.max_subject_length,
        max_detail_length=config.max_detail_length,
    )
    return Generated(
        message=message,
        changes=changes,
        explanation_error=explanation.reason if isinstance(explanation, Failure) else None,
        prompt=prompt,
        tokens_used=tokens_used,
        timings=timings,
    )


def generate_commit_message(
    status: str,
    diff_source: DiffSource,
    config: Optional[Config] = None,
    client_factory: ClientFactory = default_client_factory,
    hint: Optional[str] = None,
    environ: Optional[dict] = None,
) -> PipelineOutcome:
    """Classify, title, explain and compose. Never raises.

    Returns NoChanges for an empty report; otherwise a Generated outcome
    whose message fields are always filled in.
    """
    config = config or Config()
    try:
        return _run(status, diff_source, config, client_factory, hint, environ)
    except Exception as e:
        return Generated(message=fallback_message(), error=f"{type(e).__name__}: {e}")
