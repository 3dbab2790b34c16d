from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, TextAreaField, SelectField, BooleanField
from wtforms.validators import DataRequired, Length, Optional, URL, ValidationError

from .assignments import parse_deadline
from .groups import ACTION_CREATE, ACTION_JOIN
from .models import SUBMISSION_TYPES, SUBMISSION_INDIVIDUAL

# JSON bodies are accepted too: Flask-WTF reads request.get_json() when there is no form data.

class LoginForm(FlaskForm):
    username = StringField("Username", validators=[DataRequired(), Length(max=64)])
    password = PasswordField("Password", validators=[DataRequired()])
    remember = BooleanField("Remember me")

class AssignmentForm(FlaskForm):
    id = StringField("Id", validators=[Optional(), Length(max=32)])
    title = StringField("Assignment Title", validators=[DataRequired(), Length(max=200)])
    description = TextAreaField("Description", validators=[Optional()])
    deadline = StringField("Deadline", validators=[DataRequired()])
    submission_type = SelectField(
        "Submission Type",
        choices=[(t, t) for t in SUBMISSION_TYPES],
        default=SUBMISSION_INDIVIDUAL,
    )
    one_drive_link = StringField("OneDrive Link", validators=[Optional(), URL(), Length(max=500)])

    def validate_deadline(self, field):
        try:
            parse_deadline(field.data)
        except ValueError:
            raise ValidationError("Not a valid ISO-8601 date.")

    def to_data(self, course_id):
        return {
            "id": self.id.data or None,
            "course_id": course_id,
            "title": self.title.data,
            "description": self.description.data,
            "deadline": self.deadline.data,
            "submission_type": self.submission_type.data,
            "one_drive_link": self.one_drive_link.data,
        }

class GroupActionForm(FlaskForm):
    action = SelectField("Action", choices=[(ACTION_CREATE, "Create"), (ACTION_JOIN, "Join")])
    group_id = StringField("Group", validators=[Optional(), Length(max=32)])
