from flask_wtf import FlaskForm
from wtforms import FloatField, IntegerField
from wtforms.validators import NumberRange

# NumberRange also rejects a missing value; InputRequired would refuse a literal 0 weight
class WeightsForm(FlaskForm):
    application_weight = FloatField("Application weight", validators=[NumberRange(min=0, max=1)])
    interview_weight = FloatField("Interview weight", validators=[NumberRange(min=0, max=1)])
    character_weight = FloatField("Character weight", validators=[NumberRange(min=0, max=1)])
    outlier_std_devs = FloatField("Outlier threshold (std devs)", validators=[NumberRange(min=0.1, max=10)])
    top_n_display = IntegerField("Highlight top N", validators=[NumberRange(min=0)])
