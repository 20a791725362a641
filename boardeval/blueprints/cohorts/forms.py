from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, BooleanField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional

class CohortForm(FlaskForm):
    term = StringField("Term", validators=[DataRequired(), Length(max=40)])
    year = IntegerField("Year", validators=[InputRequired(), NumberRange(min=1900, max=3000)])

class PhaseToggleForm(FlaskForm):
    open = BooleanField("Open")

class ActiveToggleForm(FlaskForm):
    active = BooleanField("Active")

class ScorableToggleForm(FlaskForm):
    scorable = BooleanField("Scorable")

class BoardMemberForm(FlaskForm):
    user_id = IntegerField("User", validators=[InputRequired()])
    position = StringField("Position", validators=[Optional(), Length(max=120)])
