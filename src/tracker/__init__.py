"""Incident tracker core — live view of organisational threat posture.

Modules
───────
  store     — ordered in-memory collection of Incidents
  metrics   — fleet-wide indicators: active/resolved counts, threat level, health
  alerts    — bounded FIFO buffer of synthetic advisory alerts
  monitor   — cancellable periodic tick (metrics refresh + alert draw)
  settings  — YAML-backed runtime settings
  core      — SecurityCore facade: the operations the console calls
"""
