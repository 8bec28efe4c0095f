from marshmallow import EXCLUDE, fields, pre_load, validate

from domain.athletes.models import GENDERS, INJURY_SEVERITIES, INJURY_STATUSES
from khelbharat.extensions import ma

REQUIRED_MESSAGE = "Please fill all required fields correctly."


class FormSchema(ma.Schema):
    """Form binding: trims text and treats blank inputs as not submitted."""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def strip_blanks(self, data, **kwargs):
        cleaned = {}
        for key, value in dict(data).items():
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            cleaned[key] = value
        return cleaned


class SelectAthleteForm(FormSchema):
    athlete_id = fields.Integer(required=True, data_key="athleteId")


class AdminAthleteForm(FormSchema):
    name = fields.String(required=True)
    age = fields.Integer(required=True, validate=validate.Range(min=0))
    sport = fields.String(required=True)
    country = fields.String(required=True)
    gender = fields.String(required=True, validate=validate.OneOf(GENDERS))
    points = fields.Float(required=True, allow_nan=False)
    career_level = fields.String(load_default="", data_key="careerLevel")
    next_goal = fields.String(load_default="", data_key="nextGoal")
    stipend = fields.Float(load_default=0, allow_nan=False)
    sponsorship = fields.Float(load_default=0, allow_nan=False)


class ProfileForm(FormSchema):
    # fields left out of the submission keep their stored values
    name = fields.String(required=True)
    age = fields.Integer(required=True, validate=validate.Range(min=0))
    sport = fields.String()
    country = fields.String()
    gender = fields.String(validate=validate.OneOf(GENDERS))


class PerformanceForm(FormSchema):
    athlete_id = fields.Integer(required=True, data_key="athleteId")
    points = fields.Float(load_default=None, allow_nan=False)
    metric = fields.String(load_default="")
    date = fields.String(load_default="")
    notes = fields.String(load_default="")


class InjuryForm(FormSchema):
    athlete_id = fields.Integer(required=True, data_key="athleteId")
    type = fields.String(required=True)
    severity = fields.String(load_default=INJURY_SEVERITIES[0], validate=validate.OneOf(INJURY_SEVERITIES))
    status = fields.String(load_default=INJURY_STATUSES[0], validate=validate.OneOf(INJURY_STATUSES))
    start_date = fields.String(load_default="", data_key="startDate")
    notes = fields.String(load_default="")


admin_athlete_form = AdminAthleteForm()
profile_form = ProfileForm()
performance_form = PerformanceForm()
injury_form = InjuryForm()
select_athlete_form = SelectAthleteForm()
