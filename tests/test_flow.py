from __future__ import annotations

import io
import json

import pytest

from wallet_deployer.exceptions import ErrorKind, ValidationError
from wallet_deployer.flow import WalletDeployFlow, parse_decimals
from wallet_deployer.prompts import ConsolePrompter

from .fakes import FakeResponse, console_output

WALLET = "0x" + "ab" * 20
CONTRACT = "0x" + "cd" * 20
TOKEN = "eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiJ1c2VyIn0.signature"


def _flow(client, console, answers, tmp_path):
    prompter = ConsolePrompter(console, stream=io.StringIO("".join(f"{a}\n" for a in answers)))
    return WalletDeployFlow(client, prompter, console, output_dir=str(tmp_path))


def _queue_login(session, token=TOKEN):
    session.queue(
        FakeResponse({"success": True}),
        FakeResponse({"walletAddress": WALLET, "token": token, "isNewUser": True, "type": "email"}),
    )


@pytest.mark.parametrize("value, expected", [
    ("", (18, True)),
    ("6", (6, True)),
    ("0", (0, True)),
    ("18", (18, True)),
    ("19", (18, False)),
    ("-1", (18, False)),
    ("abc", (18, False)),
])
def test_parse_decimals(value, expected):
    assert parse_decimals(value) == expected


def test_prompter_confirm_accepts_y_and_yes(console):
    prompter = ConsolePrompter(console, stream=io.StringIO("y\nYES\nno\nsure\n"))
    assert [prompter.confirm("ok?") for _ in range(4)] == [True, True, False, False]


def test_prompter_otp_reprompts_short_codes(console):
    prompter = ConsolePrompter(console, stream=io.StringIO("12\n\n123456\n"))
    assert prompter.ask_otp() == "123456"
    assert console_output(console).count("Invalid OTP code") == 2


def test_prompter_applies_default_to_blank_answers(console):
    prompter = ConsolePrompter(console, stream=io.StringIO("\n  6  \n"))

    assert prompter.ask("Enter token decimals", default="18") == "18"
    assert prompter.ask("Enter token decimals", default="18") == "6"
    assert "(18)" in console_output(console)


def test_prompter_treats_blank_confirm_as_no(console):
    prompter = ConsolePrompter(console, stream=io.StringIO("\n"))
    assert prompter.confirm("ok?") is False


def test_prompter_returns_bracketed_default(console):
    prompter = ConsolePrompter(console, stream=io.StringIO("\n"))
    assert prompter.ask("Enter initial supply", default="[0]") == "[0]"


def test_prompter_raises_eof_when_input_runs_out(console):
    prompter = ConsolePrompter(console, stream=io.StringIO(""))
    with pytest.raises(EOFError):
        prompter.ask("anything")


def test_prompter_refuses_input_after_close(console):
    with ConsolePrompter(console, stream=io.StringIO("x\n")) as prompter:
        pass
    with pytest.raises(RuntimeError):
        prompter.ask("anything")


def test_token_metadata_prompt_uses_defaults_and_upper_cases_symbol(client, console, tmp_path):
    flow = _flow(client, console, ["My Token", "mtk", "A test token", "", ""], tmp_path)

    metadata = flow.prompt_token_metadata()

    assert metadata.name == "My Token"
    assert metadata.symbol == "MTK"
    assert metadata.decimals == 18
    assert metadata.initial_supply == "0"


def test_token_metadata_prompt_coerces_bad_decimals(client, console, tmp_path):
    flow = _flow(client, console, ["", "My Token", "mtk", "desc", "42", "500"], tmp_path)

    metadata = flow.prompt_token_metadata()

    assert metadata.decimals == 18
    assert metadata.initial_supply == "500"
    output = console_output(console)
    assert "Token name is required" in output
    assert "Invalid decimals. Using default value of 18." in output


def test_invalid_email_aborts_before_any_request(client, session, console, tmp_path):
    flow = _flow(client, console, ["n", "user.com"], tmp_path)

    with pytest.raises(ValidationError) as exc_info:
        flow.run_interactive()

    assert exc_info.value.kind == ErrorKind.VALIDATION
    assert session.calls == []


def test_ecosystem_id_required_after_opting_in(client, session, console, tmp_path):
    flow = _flow(client, console, ["y", ""], tmp_path)

    with pytest.raises(ValidationError):
        flow.run_interactive()

    assert session.calls == []


def test_interactive_flow_deploys_and_saves_with_truncated_token(client, session, console, tmp_path):
    _queue_login(session)
    session.queue(FakeResponse({"result": {"address": CONTRACT, "chainId": 137, "transactionId": "tx-1"}}))
    answers = [
        "y", "ecosystem.demo", "",        # ecosystem opt-in, id, no partner id
        "user@example.com",
        "12", "123456",                   # short OTP is re-prompted
        "y",                              # deploy
        "My Token", "mtk", "A test token", "abc", "1000000",
        "y",                              # save
    ]
    flow = _flow(client, console, answers, tmp_path)

    flow.run_interactive()

    assert [call["url"].rsplit("/v1", 1)[1] for call in session.calls] == [
        "/wallets/login/code",
        "/wallets/login/code/verify",
        "/contracts",
    ]
    assert session.calls[1]["json"]["code"] == "123456"
    assert session.calls[0]["headers"]["x-ecosystem-id"] == "ecosystem.demo"
    deploy_payload = session.calls[2]["json"]
    assert deploy_payload["constructorParams"]["symbol"] == "MTK"
    assert deploy_payload["constructorParams"]["initialSupply"] == "1000000"
    assert session.calls[2]["headers"]["Authorization"] == f"Bearer {TOKEN}"

    saved = list(tmp_path.glob("deployment-*.json"))
    assert len(saved) == 1
    assert saved[0].name.startswith(f"deployment-{CONTRACT[:8]}-")
    data = json.loads(saved[0].read_text())
    assert data["wallet"]["token"] == TOKEN[:20] + "..."
    assert data["wallet"]["ecosystemId"] == "ecosystem.demo"
    assert data["contract"]["contractAddress"] == CONTRACT
    assert data["contract"]["tokenSymbol"] == "MTK"
    assert TOKEN not in saved[0].read_text()


def test_interactive_flow_saves_wallet_only_when_deploy_declined(client, session, console, tmp_path):
    _queue_login(session)
    flow = _flow(client, console, ["n", "user@example.com", "123456", "n", "yes"], tmp_path)

    flow.run_interactive()

    saved = list(tmp_path.glob("wallet-*.json"))
    assert len(saved) == 1
    assert saved[0].name.startswith(f"wallet-{WALLET[:8]}-")
    data = json.loads(saved[0].read_text())
    assert data["address"] == WALLET
    assert data["token"] == TOKEN[:20] + "..."
    assert len(session.calls) == 2


def test_interactive_flow_writes_nothing_without_confirmation(client, session, console, tmp_path):
    _queue_login(session)
    flow = _flow(client, console, ["n", "user@example.com", "123456", "n", "n"], tmp_path)

    flow.run_interactive()

    assert list(tmp_path.glob("*.json")) == []


def test_non_interactive_flow_skips_email_prompt(client, session, console, tmp_path):
    _queue_login(session)
    session.queue(FakeResponse({"result": {"address": CONTRACT}}))
    flow = _flow(client, console, ["123456", "y", "My Token", "mtk", "desc", "", ""], tmp_path)

    flow.run_non_interactive("user@example.com")

    assert session.calls[0]["json"]["email"] == "user@example.com"
    assert "initialSupply" not in session.calls[2]["json"]["constructorParams"]
    assert "Contract deployed" in console_output(console)
    assert list(tmp_path.glob("*.json")) == []


def test_non_interactive_flow_rejects_invalid_email(client, session, console, tmp_path):
    flow = _flow(client, console, [], tmp_path)

    with pytest.raises(ValidationError):
        flow.run_non_interactive("user@")

    assert session.calls == []
