"""Audit event model, event constructors, OTLP log records and the audit logger."""