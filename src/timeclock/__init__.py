"""Time clock package.

Organized by feature modules (employees, attendance, payroll, anomalies)
with a thin Flask controller layer over service/repository layers.
"""
