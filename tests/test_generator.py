"""Tests for the generation orchestrator."""

import asyncio
from unittest.mock import patch

import pytest

from readme_updater.generation.completion import COMPLETED_DESCRIPTION, is_truncated
from readme_updater.generation.generator import (
    NEW_README_DESCRIPTION,
    UPDATED_README_DESCRIPTION,
    ReadmeGenerator,
    generate,
)
from readme_updater.generation.models import (
    GenerationRequest,
    GenerationResult,
    GenerationSettings,
    SizeClass,
)
from readme_updater.llm.claude import ClaudeProvider
from readme_updater.llm.models import (
    MissingCredential,
    Provider,
    ProviderRequestError,
    TruncatedOutputError,
    UnsupportedProvider,
)

from tests.conftest import (
    COMPLETED_RESPONSE,
    CURRENT_README,
    FENCED_RESPONSE,
    TRUNCATED_RESPONSE,
    make_adapter,
)


class TestGenerate:
    async def test_new_readme_scenario(self, credentials):
        adapter = make_adapter(Provider.claude, [FENCED_RESPONSE])

        result = await generate(
            "",
            "added login endpoint",
            "c3c3c3c - Add login endpoint",
            Provider.claude,
            SizeClass.small,
            credentials,
            adapters={Provider.claude: adapter},
        )

        adapter.invoke.assert_awaited_once()
        prompt, credential, ceiling = adapter.invoke.await_args.args
        assert "generate a new" in prompt
        assert credential == "sk-ant-test"
        assert ceiling == 2000
        assert result.change_description
        assert "```" not in result.document_content
        assert result.document_content.startswith("# Widget API")
        assert result.continuations == 0

    async def test_update_returns_normalized_output(self, credentials):
        adapter = make_adapter(Provider.chatgpt, [FENCED_RESPONSE])

        result = await generate(
            CURRENT_README,
            "added login endpoint",
            "log",
            "chatgpt",
            "medium",
            credentials,
            adapters={Provider.chatgpt: adapter},
        )

        assert isinstance(result, GenerationResult)
        assert result.provider is Provider.chatgpt
        assert result.change_description == "Documented the new login endpoint."
        assert "POST /login" in result.document_content
        assert adapter.invoke.await_args.args[1] == "sk-openai-test"
        assert adapter.invoke.await_args.args[2] == 10000

    async def test_truncated_output_triggers_one_continuation(self, credentials):
        adapter = make_adapter(Provider.claude, [TRUNCATED_RESPONSE, COMPLETED_RESPONSE])

        result = await generate(
            CURRENT_README, "changes", "log", Provider.claude, SizeClass.large, credentials,
            adapters={Provider.claude: adapter},
        )

        assert adapter.invoke.await_count == 2
        assert result.change_description == COMPLETED_DESCRIPTION
        assert result.continuations == 1
        assert not is_truncated(result.document_content)
        continuation_prompt, _, ceiling = adapter.invoke.await_args_list[1].args
        assert "and more features to add..." in continuation_prompt
        assert ceiling == GenerationSettings().completion_max_tokens

    async def test_cut_off_inside_nested_code_block_document_is_continued(self, credentials):
        cut_off = (
            "Added install docs.\n"
            "```markdown\n"
            "# Tool\n\n"
            "## Install\n\n"
            "```bash\npip install tool\n```\n\n"
            "## Features\n\n"
            "- and more features to add..."
        )
        adapter = make_adapter(Provider.claude, [cut_off, COMPLETED_RESPONSE])

        result = await generate(
            CURRENT_README, "changes", "log", Provider.claude, SizeClass.medium, credentials,
            adapters={Provider.claude: adapter},
        )

        assert adapter.invoke.await_count == 2
        assert result.continuations == 1
        continuation_prompt = adapter.invoke.await_args_list[1].args[0]
        assert "```bash\npip install tool\n```" in continuation_prompt
        assert "- and more features to add..." in continuation_prompt

    async def test_complete_output_triggers_no_continuation(self, credentials):
        adapter = make_adapter(Provider.gemini, [FENCED_RESPONSE, COMPLETED_RESPONSE])

        await generate(
            CURRENT_README, "changes", "log", Provider.gemini, SizeClass.medium, credentials,
            adapters={Provider.gemini: adapter},
        )

        adapter.invoke.assert_awaited_once()

    async def test_continuation_bound_comes_from_settings(self, credentials):
        adapter = make_adapter(Provider.claude, [TRUNCATED_RESPONSE] * 4)

        with pytest.raises(TruncatedOutputError):
            await generate(
                CURRENT_README, "changes", "log", Provider.claude, SizeClass.small, credentials,
                settings=GenerationSettings(max_continuations=2, completion_max_tokens=5000),
                adapters={Provider.claude: adapter},
            )

        assert adapter.invoke.await_count == 3

    @pytest.mark.parametrize("missing", [None, "", "   "])
    async def test_missing_credential_raises_before_network(self, credentials, missing):
        adapter = make_adapter(Provider.claude, [FENCED_RESPONSE])
        credentials["claude"] = missing

        with pytest.raises(MissingCredential) as exc_info:
            await generate(
                CURRENT_README, "changes", "log", Provider.claude, SizeClass.small, credentials,
                adapters={Provider.claude: adapter},
            )

        assert exc_info.value.provider == "claude"
        assert adapter.invoke.await_count == 0

    async def test_absent_credential_key_raises(self):
        adapter = make_adapter(Provider.gemini, [FENCED_RESPONSE])

        with pytest.raises(MissingCredential):
            await generate(
                "", "changes", "log", Provider.gemini, SizeClass.small, {"claude": "k"},
                adapters={Provider.gemini: adapter},
            )

        adapter.invoke.assert_not_awaited()

    async def test_unsupported_provider(self, credentials):
        with pytest.raises(UnsupportedProvider):
            await generate("", "changes", "log", "llama", SizeClass.small, credentials)

    async def test_provider_error_surfaces_unmodified(self, credentials):
        error = ProviderRequestError(Provider.claude, "invalid x-api-key", status=401)
        adapter = make_adapter(Provider.claude, [error])

        with pytest.raises(ProviderRequestError) as exc_info:
            await generate(
                CURRENT_README, "changes", "log", Provider.claude, SizeClass.small, credentials,
                adapters={Provider.claude: adapter},
            )

        assert exc_info.value is error

    async def test_error_during_continuation_propagates(self, credentials):
        error = ProviderRequestError(Provider.claude, "timed out")
        adapter = make_adapter(Provider.claude, [TRUNCATED_RESPONSE, error])

        with pytest.raises(ProviderRequestError) as exc_info:
            await generate(
                CURRENT_README, "changes", "log", Provider.claude, SizeClass.small, credentials,
                adapters={Provider.claude: adapter},
            )

        assert exc_info.value is error

    async def test_default_description_for_new_readme(self, credentials):
        adapter = make_adapter(Provider.claude, ["```markdown\n# New Project\n```"])

        result = await generate(
            "", "changes", "log", Provider.claude, SizeClass.small, credentials,
            adapters={Provider.claude: adapter},
        )

        assert result.change_description == NEW_README_DESCRIPTION

    async def test_default_description_for_update(self, credentials):
        adapter = make_adapter(Provider.claude, ["```markdown\n# Widget API\n```"])

        result = await generate(
            CURRENT_README, "changes", "log", Provider.claude, SizeClass.small, credentials,
            adapters={Provider.claude: adapter},
        )

        assert result.change_description == UPDATED_README_DESCRIPTION


class TestReadmeGenerator:
    async def test_cancel_after_initial_call_skips_continuation(self, credentials):
        adapter = make_adapter(Provider.claude, [TRUNCATED_RESPONSE, COMPLETED_RESPONSE])
        cancel = asyncio.Event()

        async def _invoke(*args):
            cancel.set()
            return TRUNCATED_RESPONSE

        adapter.invoke.side_effect = _invoke
        generator = ReadmeGenerator(adapters={Provider.claude: adapter})
        request = GenerationRequest(current_document=CURRENT_README, provider=Provider.claude)

        with pytest.raises(asyncio.CancelledError):
            await generator.generate(request, credentials, cancel_event=cancel)

        adapter.invoke.assert_awaited_once()

    async def test_concurrent_generations_are_independent(self, credentials):
        claude = make_adapter(Provider.claude, [FENCED_RESPONSE])
        gemini = make_adapter(Provider.gemini, [TRUNCATED_RESPONSE, COMPLETED_RESPONSE])
        generator = ReadmeGenerator(adapters={Provider.claude: claude, Provider.gemini: gemini})

        first, second = await asyncio.gather(
            generator.generate(GenerationRequest(provider=Provider.claude), credentials),
            generator.generate(GenerationRequest(provider=Provider.gemini), credentials),
        )

        assert first.continuations == 0
        assert second.continuations == 1
        assert first.provider is Provider.claude
        assert second.provider is Provider.gemini

    async def test_builds_registered_adapter_when_none_injected(self, credentials):
        generator = ReadmeGenerator()
        with patch.object(
            ClaudeProvider, "_send", autospec=True, return_value=FENCED_RESPONSE
        ) as send:
            result = await generator.generate(GenerationRequest(provider=Provider.claude), credentials)

        send.assert_awaited_once()
        assert result.provider is Provider.claude

    async def test_credentials_keyed_by_enum(self):
        adapter = make_adapter(Provider.gemini, [FENCED_RESPONSE])
        generator = ReadmeGenerator(adapters={Provider.gemini: adapter})

        await generator.generate(
            GenerationRequest(provider=Provider.gemini), {Provider.gemini: "enum-key"}
        )

        assert adapter.invoke.await_args.args[1] == "enum-key"
