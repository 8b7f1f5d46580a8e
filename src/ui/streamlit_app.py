"""
Streamlit UI -- Natural Language SQL Agent.

Features:
  - Free-text request box with clickable sample prompts
  - Live translation (SQL + explanation) on every edit
  - "Generate & Execute" runs the SQL on the embedded orders dataset
  - Results table with formatted cells and CSV download
  - Bar chart keyed on the first label column and first numeric column
"""
import streamlit as st
import httpx
import pandas as pd

from src.agent.formatting import format_cell
from src.core.config import get_settings

API_BASE = get_settings().api_base
_TIMEOUT = 30

st.set_page_config(
    page_title="Natural Language SQL Agent",
    page_icon="bar_chart",
    layout="wide",
)


if "request_text" not in st.session_state:
    st.session_state.request_text = ""

if "examples" not in st.session_state:
    st.session_state.examples = None


def _load_examples():
    """Fetch /examples from the API; cache in session_state."""
    try:
        resp = httpx.get(f"{API_BASE}/examples", timeout=5).json()
        st.session_state.examples = resp.get("examples", [])
    except Exception:
        st.session_state.examples = []


def _post(path: str, payload: dict) -> dict | None:
    try:
        resp = httpx.post(f"{API_BASE}{path}", json=payload, timeout=_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    except httpx.ConnectError:
        st.error("Cannot reach the API. Start it with:\n```\nuvicorn src.api.main:app --reload\n```")
    except httpx.HTTPStatusError as exc:
        st.error(f"API returned {exc.response.status_code}: {exc.response.text}")
    return None


def _render_chart(chart: dict):
    """Render the bar chart described by a ChartSpec dict."""
    df = pd.DataFrame({chart["label_column"]: chart["labels"], chart["dataset_label"]: chart["values"]})
    st.subheader("Visualization")
    st.bar_chart(df.set_index(chart["label_column"])[[chart["dataset_label"]]])


def _render_result(data: dict):
    error = data.get("error")
    if error:
        st.error(error)
        return

    rows = data.get("rows", [])
    columns = data.get("columns", [])
    st.subheader("Query Result")
    if rows:
        st.caption(f"{len(rows)} rows  ·  {data.get('latency_ms', 0)} ms")
        display = pd.DataFrame([{c: format_cell(r.get(c)) for c in columns} for r in rows], columns=columns)
        st.dataframe(display, use_container_width=True)
        st.download_button(
            "Download CSV",
            pd.DataFrame(rows, columns=columns).to_csv(index=False),
            file_name="query_results.csv",
            mime="text/csv",
        )
    else:
        st.info("The query returned no rows.")

    chart = data.get("chart")
    if chart:
        _render_chart(chart)


st.title("Natural Language SQL Agent")
st.markdown(
    "Type a simple English request. The agent translates it into SQL, runs the query on the "
    "embedded operations dataset, and renders the raw results and a visualization when possible."
)

left, right = st.columns([2, 1])

with right:
    st.subheader("Try these")
    if st.session_state.examples is None:
        _load_examples()
    for i, prompt in enumerate(st.session_state.examples):
        if st.button(prompt, key=f"ex_{i}", use_container_width=True):
            st.session_state.request_text = prompt

with left:
    text = st.text_area(
        "Natural language request",
        key="request_text",
        placeholder="e.g. total sales by region for February",
        height=120,
    )
    translation = _post("/translate", {"text": text})
    execute = st.button("Generate & Execute", type="primary", disabled=translation is None)
    if translation:
        st.caption(translation["explanation"])

if translation:
    st.subheader("Generated SQL")
    st.code(translation["sql"], language="sql")

if execute:
    with st.spinner("Running..."):
        data = _post("/query", {"text": text, "execute": True})
    if data:
        _render_result(data)
