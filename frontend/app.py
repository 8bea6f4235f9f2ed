# Streamlit UI that talks to the access API
import streamlit as st

import api_client

st.set_page_config(page_title="Project Access", layout="wide")
st.title("Project Access")


def _label(rec, fallback):
    return f"{rec.get('id')} - {rec.get('name', fallback)}"


def _load(fn):
    try:
        return fn()
    except Exception as exc:
        st.error(f"Could not reach {api_client.API}: {exc}")
        return []


users = _load(api_client.list_users)
projects = _load(api_client.list_projects)

tabs = st.tabs(["Access", "Grant", "Users", "Projects"])

# Access list, editable and saved back as a whole
with tabs[0]:
    st.header("Access grants")
    access = _load(api_client.list_access)
    edited = st.data_editor(access, num_rows="dynamic", use_container_width=True)
    col1, col2 = st.columns(2)
    if col1.button("Save (merge)"):
        try:
            r = api_client.save_access(list(edited))
            st.success(f"Saved {r['count']} records")
        except api_client.ApiError as exc:
            st.error(str(exc))
    if col2.button("Replace all"):
        try:
            r = api_client.save_access(list(edited), replace=True)
            st.success(f"Replaced, {r['count']} records")
        except api_client.ApiError as exc:
            st.error(str(exc))

# Grant or update one user/project pair
with tabs[1]:
    st.header("Grant access")
    umap = {_label(u, "user"): u.get("id") for u in users}
    pmap = {_label(p, "project"): p.get("id") for p in projects}
    sel_user = st.selectbox("User", options=list(umap.keys()))
    sel_project = st.selectbox("Project", options=list(pmap.keys()))
    can_read = st.checkbox("Read", value=True)
    can_write = st.checkbox("Write", value=False)
    if st.button("Save grant"):
        if not sel_user or not sel_project:
            st.error("Choose a user and a project")
        else:
            try:
                api_client.grant(umap[sel_user], pmap[sel_project], can_read, can_write)
                st.success("Saved")
            except (api_client.ApiError, TypeError, ValueError) as exc:
                st.error(str(exc))

with tabs[2]:
    st.header("Users")
    st.json(users)

with tabs[3]:
    st.header("Projects")
    st.json(projects)
