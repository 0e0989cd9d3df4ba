"""
Resume Job Finder.

Core components:
- agents: Resume analyzer and grounded job searcher (Gemini)
- tools: File encoder for inline resume attachments
- store: Local preference store (theme, saved jobs)
- utils: Result presenter for the search markdown
- wizard: Upload -> Analyze -> Confirm -> Search -> Results flow
"""
