"""Technician profile, credential and stats endpoints."""

from . import certifications, completions, skills, stats, tech_profiles

__all__ = [
    "certifications",
    "completions",
    "skills",
    "stats",
    "tech_profiles",
]
