from __future__ import annotations

import pytest

from adapters.auth import bearer_header, looks_like_jwt, mask_token
from adapters.solution_provider import (
    FileSolutionProvider,
    StaticSolutionProvider,
    YOUNGER_EMPLOYEES_QUERY,
    build_solution_provider,
)
from core.domain.models import IdentityRequest, SubmissionPayload, WebhookGrant
from core.domain.outcomes import RunState


def test_identity_wire_names():
    identity = IdentityRequest(name="A", registration_id="1", email="a@b.c")
    assert identity.to_wire() == {"name": "A", "regNo": "1", "email": "a@b.c"}
    assert IdentityRequest.model_validate({"name": "A", "regNo": "1", "email": "a@b.c"}) == identity


def test_identity_missing_fields():
    identity = IdentityRequest(name=" ", registration_id="1", email="")
    assert identity.missing_fields() == ["name", "email"]


@pytest.mark.parametrize(
    ("url", "token", "valid"),
    [
        ("https://x/y", "abc", True),
        ("", "abc", False),
        ("https://x/y", "", False),
        ("  ", "abc", False),
    ],
)
def test_grant_validity(url, token, valid):
    assert WebhookGrant(webhook_url=url, access_token=token).is_valid() is valid


def test_payload_wire_name():
    assert SubmissionPayload(query="SELECT 1;").to_wire() == {"finalQuery": "SELECT 1;"}


def test_terminal_states():
    assert {s for s in RunState if s.is_terminal} == {RunState.SUCCEEDED, RunState.WARNED, RunState.FAILED}


def test_bearer_header():
    assert bearer_header(" tok ") == "Bearer tok"
    with pytest.raises(ValueError):
        bearer_header("  ")


def test_mask_token_never_reveals_short_tokens():
    assert mask_token("abcdefghijklmnop") == "abcdefghij..."
    assert mask_token("abc") == "***"


def test_looks_like_jwt():
    assert looks_like_jwt("aaa.bbb.ccc")
    assert not looks_like_jwt("aaa.bbb")
    assert not looks_like_jwt("aaa..ccc")


def test_static_solution_is_the_embedded_query():
    provider = StaticSolutionProvider()
    assert provider.get() == YOUNGER_EMPLOYEES_QUERY
    assert "YOUNGER_EMPLOYEES_COUNT" in provider.get()
    assert provider.explain()


def test_file_solution(tmp_path):
    path = tmp_path / "answer.sql"
    path.write_text("\nSELECT 2;\n", encoding="utf-8")
    assert FileSolutionProvider(path).get() == "SELECT 2;"

    path.write_text("   \n", encoding="utf-8")
    with pytest.raises(ValueError):
        FileSolutionProvider(path).get()


def test_build_solution_provider_precedence(settings, tmp_path):
    assert isinstance(build_solution_provider(settings), StaticSolutionProvider)

    configured = settings.model_copy(update={"solution_path": tmp_path / "a.sql"})
    provider = build_solution_provider(configured, tmp_path / "b.sql")
    assert isinstance(provider, FileSolutionProvider)
    assert "b.sql" in provider.explain()
