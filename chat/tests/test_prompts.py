from django.test import TestCase

from analyzer.tests.helpers import CONTRACT_TEXT, make_analysis, make_contract
from chat.prompts import build_chat_context, build_conversation


class TestChatContext(TestCase):
    def test_context_without_analysis_still_has_contract(self):
        context = build_chat_context(CONTRACT_TEXT, None)
        self.assertIn(CONTRACT_TEXT, context)
        self.assertNotIn("Analysis Summary", context)
        self.assertNotIn("Current Focus", context)

    def test_context_with_analysis_and_focus(self):
        contract = make_contract()
        analysis = make_analysis(contract, summary="Liability is uncapped.")
        context = build_chat_context(contract.extracted_text, analysis, "termination")

        self.assertIn("Overall Risk Level: HIGH", context)
        self.assertIn("Summary: Liability is uncapped.", context)
        self.assertIn("### Liability Clause\nRisk Level: HIGH", context)
        self.assertIn("- Notice period under 30 days", context)
        self.assertIn("specifically asking about the termination clause", context)
        self.assertLess(context.index("Detected Clauses"), context.index("Current Focus"))


class TestConversation(TestCase):
    def test_first_message_carries_context(self):
        messages = build_conversation("CONTEXT", [], "What is the notice period?")
        self.assertEqual(messages, [{
            "role": "user",
            "content": "CONTEXT\n\n---\n\nUser Question: What is the notice period?",
        }])

    def test_context_prepended_to_first_historical_turn_only(self):
        history = [
            {"role": "user", "content": "q1"},
            {"role": "assistant", "content": "a1"},
            {"role": "user", "content": "q2"},
            {"role": "assistant", "content": "a2"},
        ]
        messages = build_conversation("CONTEXT", history, "q3")

        self.assertEqual([m["role"] for m in messages], ["user", "assistant", "user", "assistant", "user"])
        self.assertEqual(messages[0]["content"], "CONTEXT\n\n---\n\nUser Question: q1")
        self.assertEqual([m["content"] for m in messages[1:]], ["a1", "q2", "a2", "q3"])
        self.assertEqual(sum("CONTEXT" in m["content"] for m in messages), 1)

    def test_leading_assistant_turn_is_skipped(self):
        history = [
            {"role": "assistant", "content": "a0"},
            {"role": "user", "content": "q1"},
            {"role": "assistant", "content": "a1"},
        ]
        messages = build_conversation("CONTEXT", history, "q2")
        self.assertEqual(messages[0]["content"], "CONTEXT\n\n---\n\nUser Question: q1")
        self.assertEqual(len(messages), 3)
