# File: flashdeck_app/modules/auth/forms.py
# Login and registration forms.

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SubmitField
from wtforms.validators import DataRequired, Email, EqualTo, Length, ValidationError

from ...models import User


class LoginForm(FlaskForm):
    username = StringField('Username', validators=[DataRequired(message="Please enter your username.")])
    password = PasswordField('Password', validators=[DataRequired(message="Please enter your password.")])
    remember_me = BooleanField('Remember me')
    submit = SubmitField('Log in')


class RegistrationForm(FlaskForm):
    username = StringField('Username', validators=[
        DataRequired(message="Please enter a username."),
        Length(max=80),
    ])
    email = StringField('Email', validators=[
        DataRequired(message="Please enter your email."),
        Email(message="Please enter a valid email address."),
        Length(max=120),
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message="Please enter a password."),
        Length(min=8, message="Password must be at least 8 characters."),
    ])
    password2 = PasswordField(
        'Repeat password',
        validators=[DataRequired(message="Please confirm your password."), EqualTo('password', message='Passwords do not match.')]
    )
    submit = SubmitField('Register')

    def validate_username(self, username):
        """Reject usernames that are already taken."""
        if User.query.filter_by(username=username.data).first() is not None:
            raise ValidationError('This username is already taken.')

    def validate_email(self, email):
        if User.query.filter_by(email=email.data).first() is not None:
            raise ValidationError('This email is already registered.')
