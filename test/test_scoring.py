"""
Test cases for the scoring engine.
Scoring is pure, so no application or database is needed here.
"""
import pytest

from quizhub.quiz.answer_key import AnswerKeyEntry
from quizhub.quiz.scoring import percentage, score
from quizhub.quiz.submission import Submission


def key(*entries):
    return [AnswerKeyEntry(question_id=qid, correct_option=opt, points=pts) for qid, opt, pts in entries]


class TestScenarios:
    """Worked examples."""

    def test_one_of_two_correct(self):
        answer_key = key((1, 'A', 1), (2, 'B', 1))
        result = score(answer_key, Submission.from_mapping({'1': 'A', '2': 'C'}))

        assert result.correct_count == 1
        assert result.total_points == 1
        assert result.max_points == 2
        assert result.percentage == 50

    def test_quiz_without_questions(self):
        result = score([], Submission.from_mapping({'1': 'A'}))

        assert result.percentage == 0
        assert result.max_points == 0
        assert result.total_points == 0
        assert result.per_question == ()

    def test_unanswered_weighted_question(self):
        result = score(key((7, 'C', 5)), Submission())

        assert result.correct_count == 0
        assert result.total_points == 0
        assert result.max_points == 5
        assert result.percentage == 0
        assert result.per_question[0].selected_option is None
        assert result.per_question[0].is_correct is False


class TestPoints:

    @pytest.mark.parametrize('points', [None, 0, -3])
    def test_unset_or_non_positive_points_count_as_one(self, points):
        result = score(key((1, 'A', points)), {1: 'A'})
        assert result.max_points == 1
        assert result.total_points == 1
        assert result.per_question[0].points_earned == 1

    def test_fractional_points_below_one_count_as_one(self):
        result = score(key((1, 'A', 0.5), (2, 'B', 2.7)), {1: 'A', 2: 'B'})
        assert [entry.points for entry in result.per_question] == [1, 2]
        assert result.max_points == 3

    def test_max_points_is_sum_of_effective_points(self):
        answer_key = key((1, 'A', 3), (2, 'B', None), (3, 'C', 2), (4, 'D', 0))
        result = score(answer_key, {})
        assert result.max_points == 3 + 1 + 2 + 1

    def test_points_weighting(self):
        answer_key = key((1, 'A', 3), (2, 'B', 1))
        result = score(answer_key, {1: 'A', 2: 'A'})
        assert result.total_points == 3
        assert result.max_points == 4
        assert result.percentage == 75


class TestRounding:
    """Percentages round half up."""

    @pytest.mark.parametrize('total, maximum, expected', [
        (1, 8, 13),    # 12.5
        (3, 8, 38),    # 37.5
        (1, 3, 33),
        (2, 3, 67),
        (5, 5, 100),
        (0, 5, 0),
        (0, 0, 0),
    ])
    def test_percentage(self, total, maximum, expected):
        assert percentage(total, maximum) == expected

    def test_half_point_rounds_up_through_score(self):
        answer_key = key(*[(i, 'A', 1) for i in range(1, 9)])
        result = score(answer_key, {1: 'A'})
        assert result.percentage == 13


class TestCorrectness:

    def test_comparison_is_case_sensitive(self):
        result = score(key((1, 'B', 1)), {1: 'b'})
        assert result.correct_count == 0

    def test_malformed_entries_count_as_unanswered(self):
        submission = Submission.from_mapping({'1': 'Z', 'abc': 'A', '2': 5})
        result = score(key((1, 'A', 1), (2, 'B', 1)), submission)
        assert [entry.selected_option for entry in result.per_question] == [None, None]
        assert result.correct_count == 0

    def test_answers_for_unknown_questions_are_ignored(self):
        result = score(key((1, 'A', 1)), {1: 'A', 99: 'B'})
        assert len(result.per_question) == 1
        assert result.percentage == 100

    def test_missing_submission_does_not_fail(self):
        result = score(key((1, 'A', 2)), None)
        assert result.max_points == 2
        assert result.total_points == 0


class TestOrderingAndPurity:

    def test_per_question_order_follows_answer_key(self):
        answer_key = key((5, 'A', 1), (2, 'B', 1), (9, 'C', 1))
        result = score(answer_key, {9: 'C'})
        assert [entry.question_id for entry in result.per_question] == [5, 2, 9]
        assert [entry.correct_option for entry in result.per_question] == ['A', 'B', 'C']

    def test_identical_inputs_give_identical_results(self):
        answer_key = key((1, 'A', 2), (2, 'D', 3))
        submission = Submission.from_mapping({'1': 'A', '2': 'C'})
        assert score(answer_key, submission) == score(answer_key, submission)

    def test_to_dict_shape(self):
        data = score(key((1, 'A', 1)), {1: 'A'}).to_dict()
        assert data['percentage'] == 100
        assert data['per_question'][0] == {
            'question_id': 1,
            'correct_option': 'A',
            'selected_option': 'A',
            'is_correct': True,
            'points_earned': 1,
            'points': 1,
        }
