"""
Contact form: field validation rules and the POST /contact route.
"""
import pytest

from portfolio.services.contact_validation import (
    ContactFormData,
    is_valid_email,
    validate_contact_form,
)

VALID_MESSAGE = "This is a test message that is long enough to pass validation"


class TestValidateContactForm:

    @pytest.mark.parametrize("data,error_count", [
        (ContactFormData(name="John Doe", email="john@example.com", message=VALID_MESSAGE), 0),
        (ContactFormData(name="", email="john@example.com", message=VALID_MESSAGE), 1),
        (ContactFormData(name="   ", email="john@example.com", message=VALID_MESSAGE), 1),
        (ContactFormData(name="a" * 101, email="john@example.com", message=VALID_MESSAGE), 1),
        (ContactFormData(name="John Doe", email="", message=VALID_MESSAGE), 1),
        (ContactFormData(name="John Doe", email="not-an-email", message=VALID_MESSAGE), 1),
        (ContactFormData(name="John Doe", email="a" * 250 + "@example.com", message=VALID_MESSAGE), 1),
        (ContactFormData(name="John Doe", email="john@example.com", message=""), 1),
        (ContactFormData(name="John Doe", email="john@example.com", message="short"), 1),
        (ContactFormData(name="John Doe", email="john@example.com", message="a" * 1001), 1),
        (ContactFormData(name="", email="invalid-email", message="short"), 3),
    ])
    def test_error_counts(self, data, error_count):
        assert len(validate_contact_form(data)) == error_count

    def test_violations_name_their_fields(self):
        violations = validate_contact_form(ContactFormData(name="", email="invalid-email", message="short"))
        assert {v.field for v in violations} == {"name", "email", "message"}

    def test_boundaries_accepted(self):
        data = ContactFormData(name="a" * 100, email="john@example.com", message="a" * 10)
        assert validate_contact_form(data) == []
        data = ContactFormData(name="John", email="john@example.com", message="a" * 1000)
        assert validate_contact_form(data) == []

    def test_overlong_email_reports_length_only(self):
        violations = validate_contact_form(
            ContactFormData(name="John Doe", email="a" * 250 + "@example.com", message=VALID_MESSAGE)
        )
        assert len(violations) == 1
        assert violations[0].field == "email"
        assert "254" in violations[0].message

    def test_from_form_trims(self):
        data = ContactFormData.from_form({"name": "  John  ", "email": " john@example.com "})
        assert data == ContactFormData(name="John", email="john@example.com", message="")

    @pytest.mark.parametrize("data,field,message", [
        (ContactFormData(name="   ", email="john@example.com", message=VALID_MESSAGE),
         "name", "Name is required"),
        (ContactFormData(name="a" * 101, email="john@example.com", message=VALID_MESSAGE),
         "name", "Name must be 100 characters or fewer"),
        (ContactFormData(name="John", email="", message=VALID_MESSAGE),
         "email", "Email is required"),
        (ContactFormData(name="John", email="nope", message=VALID_MESSAGE),
         "email", "Please enter a valid email address"),
        (ContactFormData(name="John", email="john@example.com", message=""),
         "message", "Message is required"),
        (ContactFormData(name="John", email="john@example.com", message="a" * 1001),
         "message", "Message must be 1000 characters or fewer"),
    ])
    def test_violation_messages(self, data, field, message):
        violations = validate_contact_form(data)
        assert len(violations) == 1
        assert violations[0].field == field
        assert violations[0].message == message

    def test_surrounding_whitespace_is_stripped_before_checks(self):
        data = ContactFormData(name="  John  ", email="\tjohn@example.com\n", message=" " + "a" * 10)
        assert data.email == "john@example.com"
        assert validate_contact_form(data) == []


class TestEmailPattern:

    @pytest.mark.parametrize("email,valid", [
        ("test@example.com", True),
        ("user.name@example.com", True),
        ("user+tag@example.com", True),
        ("user123@example-domain.com", True),
        ("john@mail.example.co.uk", True),
        ("invalid.email", False),
        ("@example.com", False),
        ("test@", False),
        ("", False),
        ("test..test@example.com", False),
        ("a..b@c.com", False),
        ("test@example", False),
        ("a@b", False),
        ("a@b@example.com", False),
        ("test@example..com", False),
        ("test@example.com\n", False),
        (" test@example.com", False),
    ])
    def test_pattern(self, email, valid):
        assert is_valid_email(email) is valid


class TestContactRoute:

    def _post(self, client, **fields):
        return client.post("/contact", data=fields)

    def test_get_renders_form(self, client):
        response = client.get("/contact")
        assert response.status_code == 200
        assert b'name="message"' in response.data

    def test_valid_submission_redirects(self, client):
        response = self._post(client, name="John Doe", email="john@example.com", message=VALID_MESSAGE)
        assert response.status_code == 303
        assert response.headers["Location"].endswith("/contact?sent=1")

        confirmation = client.get("/contact?sent=1")
        assert b"your message has been sent" in confirmation.data

    @pytest.mark.parametrize("fields", [
        {"email": "john@example.com", "message": VALID_MESSAGE},
        {"name": "", "email": "john@example.com", "message": VALID_MESSAGE},
        {"name": "John Doe", "email": "invalid-email", "message": VALID_MESSAGE},
        {"name": "John Doe", "email": "", "message": VALID_MESSAGE},
        {"name": "John Doe", "email": "john@example.com"},
        {"name": "John Doe", "email": "john@example.com", "message": ""},
        {"name": "John Doe", "email": "john@example.com", "message": "short"},
        {"name": "a" * 101, "email": "john@example.com", "message": VALID_MESSAGE},
        {"name": "John Doe", "email": "a" * 250 + "@example.com", "message": VALID_MESSAGE},
        {"name": "John Doe", "email": "john@example.com", "message": "a" * 1001},
    ])
    def test_invalid_submissions_rejected(self, client, fields):
        response = self._post(client, **fields)
        assert response.status_code == 400
        assert b"Please fix the following" in response.data

    def test_all_errors_reported_together(self, client):
        response = self._post(client, name="", email="invalid-email", message="short")
        body = response.get_data(as_text=True)
        assert response.status_code == 400
        assert "Name is required" in body
        assert "Please enter a valid email address" in body
        assert "Message must be at least 10 characters" in body

    def test_submitted_values_are_kept_and_escaped(self, client):
        response = self._post(client, name="<b>John</b>", email="bad", message=VALID_MESSAGE)
        body = response.get_data(as_text=True)
        assert "&lt;b&gt;John&lt;/b&gt;" in body
        assert "<b>John</b>" not in body

    def test_form_too_big_rejected(self, client):
        response = self._post(
            client, name="John Doe", email="john@example.com", message="a" * (33 * 1024)
        )
        assert response.status_code == 400
        assert b"Request body too large" in response.data

    def test_form_just_under_limit_reaches_validation(self, client):
        # Fits in 32 KiB but the message is over 1000 characters
        response = self._post(
            client, name="John Doe", email="john@example.com", message="a" * (30 * 1024)
        )
        assert response.status_code == 400
        assert b"Please fix the following" in response.data
