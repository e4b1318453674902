"""
Submissions App

Handles public contact form submissions:
- Form submission with markup sanitization and validation
- Listing with search, date-range filtering, sorting and pagination
- Lookup of a single submission by id
"""
