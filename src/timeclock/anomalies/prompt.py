from __future__ import annotations

from .model import AnomalyAssessmentRequest

PROMPT_TEMPLATE = """You are an AI expert in detecting anomalies in employee attendance records.

You will receive the employee ID, clock-in time, clock-out time, expected clock-in time, and expected clock-out time.

You will determine if the attendance record is an anomaly and provide an explanation.

Employee ID: {employee_id}
Clock-in time: {clock_in_time}
Clock-out time: {clock_out_time}
Expected clock-in time: {expected_clock_in_time}
Expected clock-out time: {expected_clock_out_time}

Is this attendance record an anomaly? Respond with a boolean (true/false) in the 'isAnomaly' field.
Explain why or why not this attendance record is an anomaly in the 'anomalyExplanation' field. Focus on the magnitude and reason for the anomaly (e.g., "Clocked in 1 hour 30 minutes late", "Clocked out 30 minutes early", "Times are within expected range")."""


def render_prompt(request: AnomalyAssessmentRequest) -> str:
    return PROMPT_TEMPLATE.format(**request.model_dump())
