"""
Tests for submission validation.
"""

import pytest

from core.errors import ValidationError
from schemas.answer_value import ChoicesValue, RatedValue, ScalarValue, TextValue
from schemas.submission import AnswerInput, SubmitFormRequest
from services.submission_validation import is_unsafe_text, validate_submission


def make_request(**overrides) -> SubmitFormRequest:
    data = {
        "respondent_name": "Jane Doe",
        "respondent_email": "jane@x.com",
        "role": "Engineer",
        "answers": [AnswerInput(question_id="q1", value=4)],
    }
    data.update(overrides)
    return SubmitFormRequest(**data)


@pytest.mark.unit
class TestValidSubmissions:
    def test_valid_submission_is_trimmed(self) -> None:
        """Test surrounding whitespace is removed from every field."""
        request = make_request(
            respondent_name="  Jane Doe ",
            respondent_email=" jane@x.com ",
            role=" Engineer ",
            answers=[AnswerInput(question_id=" q1 ", value=4)],
        )

        result = validate_submission(" f1 ", request)

        assert result.form_id == "f1"
        assert result.respondent_name == "Jane Doe"
        assert result.respondent_email == "jane@x.com"
        assert result.role == "Engineer"
        assert result.answers[0].question_id == "q1"
        assert result.answers[0].value == ScalarValue(4)

    def test_all_value_shapes_are_parsed(self) -> None:
        request = make_request(
            answers=[
                AnswerInput(question_id="q1", value=4),
                AnswerInput(question_id="q2", value="Needs more meetings"),
                AnswerInput(question_id="q3", value={"rating": 5, "comment": "Good"}),
                AnswerInput(question_id="q4", value=["email", "slack"]),
            ]
        )

        values = [a.value for a in validate_submission("f1", request).answers]

        assert values == [
            ScalarValue(4),
            TextValue("Needs more meetings"),
            RatedValue(5, "Good"),
            ChoicesValue(("email", "slack")),
        ]

    def test_blank_role_becomes_none(self) -> None:
        assert validate_submission("f1", make_request(role="   ")).role is None
        assert validate_submission("f1", make_request(role=None)).role is None


@pytest.mark.unit
class TestRejectedSubmissions:
    @pytest.mark.parametrize("form_id", ["", "   ", "f" * 65])
    def test_bad_form_id(self, form_id) -> None:
        with pytest.raises(ValidationError):
            validate_submission(form_id, make_request())

    @pytest.mark.parametrize(
        "name",
        ["", "   ", "<b>Jane</b>", "javascript:alert(1)", "myscript", "SCRIPT Jones", "x" * 256],
    )
    def test_bad_name(self, name) -> None:
        with pytest.raises(ValidationError):
            validate_submission("f1", make_request(respondent_name=name))

    @pytest.mark.parametrize("name", ["myscript", "Jane Script"])
    def test_name_containing_script_is_rejected(self, name) -> None:
        """Test the word script is refused in names regardless of case."""
        with pytest.raises(ValidationError, match="Invalid characters in name"):
            validate_submission("f1", make_request(respondent_name=name))

    @pytest.mark.parametrize(
        "email",
        [
            "",
            "jane",
            "jane@",
            "@x.com",
            "jane@@x.com",
            "jane@x",
            "jane@.com",
            "jane@x.",
            "ja ne@x.com",
            "jane@x.com;drop",
            "jane--@x.com",
            "a" * 250 + "@x.com",
        ],
    )
    def test_bad_email(self, email) -> None:
        with pytest.raises(ValidationError):
            validate_submission("f1", make_request(respondent_email=email))

    @pytest.mark.parametrize("role", ["script kiddie", "Eng (Script)"])
    def test_role_with_script(self, role) -> None:
        with pytest.raises(ValidationError, match="Invalid characters in role"):
            validate_submission("f1", make_request(role=role))

    def test_role_with_markup(self) -> None:
        with pytest.raises(ValidationError):
            validate_submission("f1", make_request(role="<i>Eng</i>"))

    def test_role_too_long(self) -> None:
        with pytest.raises(ValidationError):
            validate_submission("f1", make_request(role="r" * 101))

    def test_no_answers(self) -> None:
        """Test an empty answer list is refused."""
        with pytest.raises(ValidationError, match="No answers"):
            validate_submission("f1", make_request(answers=[]))

    def test_blank_question_id(self) -> None:
        with pytest.raises(ValidationError):
            validate_submission("f1", make_request(answers=[AnswerInput(question_id=" ", value=1)]))

    @pytest.mark.parametrize("value", [None, True, [1], {"rating": "x"}, float("nan"), float("inf")])
    def test_bad_answer_value(self, value) -> None:
        with pytest.raises(ValidationError):
            validate_submission("f1", make_request(answers=[AnswerInput(question_id="q1", value=value)]))

    def test_non_finite_rating_inside_object(self) -> None:
        answer = AnswerInput(question_id="q1", value={"rating": float("nan")})

        with pytest.raises(ValidationError):
            validate_submission("f1", make_request(answers=[answer]))

    @pytest.mark.parametrize(
        "value",
        [
            "<script>alert(1)</script>",
            "click javascript:void(0)",
            '<img src=x onerror="steal()">',
            {"rating": 3, "comment": "<SCRIPT>x</SCRIPT>"},
            ["fine", "javascript:alert(1)"],
        ],
    )
    def test_script_content_in_answers(self, value) -> None:
        """Test obvious script injection is refused in every text position."""
        with pytest.raises(ValidationError, match="Invalid content"):
            validate_submission("f1", make_request(answers=[AnswerInput(question_id="q1", value=value)]))

    def test_answer_text_too_long(self) -> None:
        answer = AnswerInput(question_id="q1", value="x" * 10001)

        with pytest.raises(ValidationError, match="too long"):
            validate_submission("f1", make_request(answers=[answer]))


@pytest.mark.unit
class TestIsUnsafeText:
    def test_plain_prose_is_safe(self) -> None:
        """Test that ordinary words starting with 'on' are not flagged."""
        assert is_unsafe_text("Online onboarding went fine, once = twice") is False

    def test_inline_handler_is_unsafe(self) -> None:
        assert is_unsafe_text("<div onclick = 'x'>") is True
        assert is_unsafe_text("ONLOAD=run()") is True
