"""
Model clients for the job finder.

- client: Gemini client factory
- resume_analyzer: Extracts profile fields and an ATS audit from a resume
- job_searcher: Runs the grounded job search
"""

from job_finder.agents.client import create_client
from job_finder.agents.job_searcher import JobSearcher
from job_finder.agents.resume_analyzer import ResumeAnalyzer

__all__ = ["create_client", "JobSearcher", "ResumeAnalyzer"]
