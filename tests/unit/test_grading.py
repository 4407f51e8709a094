from types import SimpleNamespace

import pytest

from coaching.services.grading import (
    clean_answer_key, grade_submission, is_correct, normalize_option, subject_bucket
)


def make_question(id, correct_option="b", marks=4, negative=-1, subject="Physics"):
    return SimpleNamespace(id=id, correct_option=correct_option, marks=marks, negative=negative, subject=subject)


class TestAnswerMatching:
    def test_normalize_option(self):
        assert normalize_option("  B ") == "b"
        assert normalize_option("   ") is None
        assert normalize_option(None) is None

    @pytest.mark.parametrize("stored, expected", [
        ("[A, C]", "a, c"),
        ("'b'", "b"),
        ('["d"]', "d"),
        (None, ""),
    ])
    def test_clean_answer_key(self, stored, expected):
        assert clean_answer_key(stored) == expected

    def test_multi_answer_is_order_insensitive(self):
        assert is_correct("c,a", "a,c")
        assert is_correct("C, A", "[a, c]")

    def test_multi_answer_partial_is_wrong(self):
        assert not is_correct("a", "a,c")
        assert not is_correct("a,b,c", "a,c")

    def test_blank_is_never_correct(self):
        assert not is_correct("", "a")
        assert not is_correct(None, "a")

    @pytest.mark.parametrize("subject, bucket", [
        ("Physics", "physics"),
        ("Organic Chemistry", "chemistry"),
        ("Mathematics", "maths"),
        ("BIOLOGY", "biology"),
        ("General", None),
        (None, None),
    ])
    def test_subject_bucket(self, subject, bucket):
        assert subject_bucket(subject) == bucket


class TestGradeSubmission:
    def test_correct_wrong_and_skipped(self):
        questions = [
            make_question(1, "b", subject="Physics"),
            make_question(2, "a", subject="Chemistry"),
            make_question(3, "c", subject="Maths"),
        ]
        card = grade_submission(questions, {1: ("B", 30), 2: ("d", 12)})

        assert card.total_score == 3
        assert card.physics == 4
        assert card.chemistry == -1
        assert card.maths == 0
        assert (card.correct_count, card.wrong_count, card.skipped_count) == (1, 1, 1)
        assert [a.question_id for a in card.answers] == [1, 2, 3]
        assert card.answers[0].selected_option == "b"
        assert card.answers[0].time_taken == 30
        assert card.answers[2].selected_option is None
        assert card.answers[2].marks_awarded == 0

    def test_multi_answer_question_scores_full_marks(self):
        card = grade_submission([make_question(7, "a,c", marks=4, subject="Biology")], {7: ("c,a", 5)})
        assert card.total_score == 4
        assert card.biology == 4
        assert card.answers[0].is_correct

    def test_unbucketed_subject_counts_toward_total_only(self):
        card = grade_submission([make_question(1, "a", subject="Aptitude")], {1: ("a", 0)})
        assert card.total_score == 4
        assert card.physics == card.chemistry == card.maths == card.biology == 0

    def test_empty_submission_skips_everything(self):
        card = grade_submission([make_question(1), make_question(2)], {})
        assert card.total_score == 0
        assert card.skipped_count == 2
        assert len(card.answers) == 2
