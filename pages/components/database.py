"""Database setup shared by the Streamlit pages.

Any page can be the first one a user opens, so each page calls
``ensure_database`` before touching the store.
"""

import streamlit as st

from healthcore.activity_levels import seed_activity_levels
from healthcore.db import DB_PATH, init_db
from healthcore.objectives import seed_objectives


def ensure_database(state=None, db_path: str = DB_PATH):
    """Create the tables and seed reference data once per session."""
    if state is None:
        state = st.session_state
    if state.get('db_initialized'):
        return

    init_db(db_path)
    seed_activity_levels(db_path)
    seed_objectives(db_path)
    state['db_initialized'] = True
