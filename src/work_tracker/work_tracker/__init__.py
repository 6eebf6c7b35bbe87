"""Work Tracker package.

Feature modules (users, worklogs, reports, ...) hold the domain services and
repositories; a thin Flask controller layer exposes them as a JSON API.
"""
