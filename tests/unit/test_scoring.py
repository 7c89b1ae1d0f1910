"""
Unit tests for scoring completeness and export gating.
"""

import pytest

from quizgate.core.errors import SnapshotConsistencyError
from quizgate.core.models import FeedbackType, Generation
from quizgate.core.scoring import (
    ScoringSummary,
    collect_answers,
    describe_unscored,
    find_unscored,
    is_export_ready,
)


class TestCollectAnswers:
    def test_flattens_in_question_then_answer_order(self, unscored_payload):
        generation = Generation.from_api(unscored_payload)

        assert [a.id for a in collect_answers(generation)] == [11, 12, 21, 22]

    def test_skips_questions_without_answers(self, generation_payload):
        generation = Generation.from_api(generation_payload(feedback=[[], ["correct"]]))

        assert [a.id for a in collect_answers(generation)] == [21]


class TestExportGate:
    def test_all_unselected_blocks_export(self, unscored_payload):
        generation = Generation.from_api(unscored_payload)

        assert len(find_unscored(generation)) == 4
        assert is_export_ready(generation) is False

    def test_all_scored_allows_export(self, scored_payload):
        generation = Generation.from_api(scored_payload)

        assert find_unscored(generation) == []
        assert is_export_ready(generation) is True

    def test_single_unselected_blocks_export(self, generation_payload):
        generation = Generation.from_api(generation_payload(
            feedback=[["correct", "incorrect"], ["correct", "unselected"]],
        ))

        assert [a.id for a in find_unscored(generation)] == [22]
        assert is_export_ready(generation) is False

    def test_zero_questions_is_export_ready(self):
        generation = Generation(id=1, filename="empty.pdf")

        assert find_unscored(generation) == []
        assert is_export_ready(generation) is True

    def test_questions_without_answers_are_export_ready(self, generation_payload):
        generation = Generation.from_api(generation_payload(feedback=[[], []]))

        assert is_export_ready(generation) is True

    @pytest.mark.parametrize("feedback", [
        [["unselected"]],
        [["correct"], ["unselected", "incorrect"]],
        [["incorrect", "correct"], []],
        [],
    ])
    def test_ready_iff_no_unscored(self, generation_payload, feedback):
        generation = Generation.from_api(generation_payload(feedback=feedback))

        assert is_export_ready(generation) == (len(find_unscored(generation)) == 0)


class TestDescribeUnscored:
    def test_labels_in_display_order(self, unscored_payload):
        generation = Generation.from_api(unscored_payload)

        labels = [item.label for item in describe_unscored(generation)]

        assert labels == [
            "Question 1, answer choice 1",
            "Question 1, answer choice 2",
            "Question 2, answer choice 1",
            "Question 2, answer choice 2",
        ]

    def test_only_unscored_are_described(self, generation_payload):
        generation = Generation.from_api(generation_payload(
            feedback=[["correct", "unselected"], ["unselected", "incorrect"]],
        ))

        described = describe_unscored(generation)

        assert [item.answer.id for item in described] == [12, 21]
        assert [item.label for item in described] == [
            "Question 1, answer choice 2",
            "Question 2, answer choice 1",
        ]

    def test_fully_scored_has_no_diagnostics(self, scored_payload):
        assert describe_unscored(Generation.from_api(scored_payload)) == []

    def test_dangling_question_reference_is_rejected(self, unscored_payload):
        unscored_payload["questions"][1]["answers"][0]["question_id"] = 999
        generation = Generation.from_api(unscored_payload)

        with pytest.raises(SnapshotConsistencyError):
            describe_unscored(generation)

    def test_dangling_reference_on_scored_answer_does_not_matter(self, generation_payload):
        payload = generation_payload(feedback=[["correct", "unselected"]])
        payload["questions"][0]["answers"][0]["question_id"] = 999
        generation = Generation.from_api(payload)

        assert [item.label for item in describe_unscored(generation)] == [
            "Question 1, answer choice 2",
        ]


class TestScoringSummary:
    def test_counts(self, generation_payload):
        generation = Generation.from_api(generation_payload(
            feedback=[["correct", "incorrect", "unselected"], ["correct"]],
        ))

        summary = ScoringSummary.from_generation(generation)

        assert summary.total == 4
        assert summary.correct == 2
        assert summary.incorrect == 1
        assert summary.unselected == 1
        assert summary.scored == 3
        assert summary.export_ready is False

    def test_empty_generation(self):
        summary = ScoringSummary.from_generation(Generation(id=1, filename="x"))

        assert summary.total == 0
        assert summary.export_ready is True


class TestModels:
    def test_feedback_parsed_from_wire_values(self, scored_payload):
        generation = Generation.from_api(scored_payload)
        answer = generation.questions[0].answers[0]

        assert answer.user_feedback is FeedbackType.CORRECT
        assert answer.is_scored is True

    def test_missing_feedback_defaults_to_unselected(self):
        generation = Generation.from_api({
            "id": 1,
            "filename": "x",
            "questions": [{"id": 1, "question": "q", "answers": [{"id": 2, "question_id": 1}]}],
        })

        assert generation.questions[0].answers[0].user_feedback is FeedbackType.UNSELECTED

    def test_unknown_feedback_is_rejected(self):
        with pytest.raises(ValueError):
            Generation.from_api({
                "id": 1,
                "filename": "x",
                "questions": [{
                    "id": 1,
                    "question": "q",
                    "answers": [{"id": 2, "question_id": 1, "user_feedback": "maybe"}],
                }],
            })

    def test_snapshots_are_frozen(self, scored_payload):
        generation = Generation.from_api(scored_payload)

        with pytest.raises(ValueError):
            generation.filename = "changed.pdf"
