"""
Auth package for the credstore FastAPI app.

HTTP Basic authentication backed by a CredentialStore kept on `app.state`.
"""
