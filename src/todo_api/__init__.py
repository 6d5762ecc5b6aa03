"""
Todo list web application.

The FastAPI app lives in todo_api.main; import it from there
(``from todo_api.main import app``) so importing the package stays free of
side effects such as reading settings or opening the database.
"""
