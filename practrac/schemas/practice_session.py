from marshmallow import fields, validate

from practrac.models.practice_session import NOTE_TYPES
from .base import BaseSchema

TIMER_ACTIONS = ("start", "tick", "pause", "resume", "next", "previous")


class AttendanceSchema(BaseSchema):
    player_id = fields.Integer(required=True, data_key="playerId")
    attended = fields.Boolean(required=True)
    late_minutes = fields.Integer(load_default=0, data_key="lateMinutes", validate=validate.Range(min=0))
    notes = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=500))


class StartSessionSchema(BaseSchema):
    practice_id = fields.Integer(required=True, data_key="practiceId")
    attendance = fields.List(fields.Nested(AttendanceSchema), load_default=list)


class AttendanceUpdateSchema(BaseSchema):
    attendance = fields.List(fields.Nested(AttendanceSchema), required=True)


class UpdateSessionSchema(BaseSchema):
    status = fields.String(validate=validate.OneOf(("in_progress", "paused", "completed")))
    actual_duration = fields.Integer(data_key="actualDuration", validate=validate.Range(min=0))
    notes = fields.String(allow_none=True, validate=validate.Length(max=1000))
    current_phase_id = fields.Integer(allow_none=True, data_key="currentPhaseId")
    phase_elapsed_time = fields.Integer(data_key="phaseElapsedTime", validate=validate.Range(min=0))
    total_elapsed_time = fields.Integer(data_key="totalElapsedTime", validate=validate.Range(min=0))
    timer_state = fields.Dict(allow_none=True, data_key="timerState")


class CompleteSessionSchema(BaseSchema):
    actual_duration = fields.Integer(load_default=None, allow_none=True, data_key="actualDuration", validate=validate.Range(min=0))
    notes = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=1000))


class NoteSchema(BaseSchema):
    player_id = fields.Integer(required=True, data_key="playerId")
    notes = fields.String(required=True, validate=validate.Length(min=1, max=1000))
    note_type = fields.String(load_default="practice", data_key="noteType", validate=validate.OneOf(NOTE_TYPES))


class TimerActionSchema(BaseSchema):
    action = fields.String(required=True, validate=validate.OneOf(TIMER_ACTIONS))
    seconds = fields.Integer(load_default=1, validate=validate.Range(min=0, max=24 * 60 * 60))
