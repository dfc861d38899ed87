"""
Job Application Tracker – screenshot import page (Streamlit).
No extraction logic in layout; the Extraction Agent does the work.
"""

import csv
import io
import tempfile
from pathlib import Path
from typing import Optional

import streamlit as st

from agents.extraction_agent import build_extraction_agent, extract_job_data
from config import OPENAI_API_KEY, VALID_STATUSES
from schemas.extracted_job import ExtractedJobData
from services.ocr_service import tesseract_available

RECORD_FIELDS = ["company", "title", "status", "date", "notes", "sourceImageUrl"]


@st.cache_resource
def _agent():
    """One agent per server process; capabilities are checked once."""
    return build_extraction_agent()


def _save_upload(uploaded) -> str:
    """Persist an uploaded screenshot to a temp file and return its path."""
    suffix = Path(uploaded.name).suffix or ".png"
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        tmp.write(uploaded.getvalue())
        return tmp.name


def _extract_upload(uploaded, agent) -> ExtractedJobData:
    """Extract from an uploaded screenshot; the temp copy is removed afterwards."""
    path = _save_upload(uploaded)
    try:
        return extract_job_data(path, agent=agent)
    finally:
        Path(path).unlink(missing_ok=True)


def _export_csv(record: dict) -> bytes:
    """Export one record to CSV bytes."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=RECORD_FIELDS)
    writer.writeheader()
    writer.writerow({k: record.get(k) or "" for k in RECORD_FIELDS})
    return out.getvalue().encode("utf-8")


def _review_form(job: ExtractedJobData) -> None:
    """Pre-filled form so the user can correct what extraction got wrong."""
    st.subheader("Review Extracted Application")
    with st.form("review_form"):
        company = st.text_input("Company", value=job.company)
        title = st.text_input("Job Title", value=job.title)
        status = st.selectbox("Status", options=list(VALID_STATUSES), index=VALID_STATUSES.index(job.status))
        date = st.text_input("Date (YYYY-MM-DD)", value=job.date)
        notes = st.text_area("Notes", value=job.notes or "", max_chars=500)
        submitted = st.form_submit_button("Confirm", type="primary")

    if submitted:
        reviewed = ExtractedJobData(
            company=company.strip(),
            title=title.strip(),
            status=status,
            date=date,
            notes=notes,
            source_image_url=job.source_image_url,
        )
        record = reviewed.to_record()
        st.session_state["reviewed"] = record
        if not reviewed.company or not reviewed.title:
            st.warning("Company and job title are required before saving this application.")

    record = st.session_state.get("reviewed")
    if record:
        st.json(record)
        st.download_button(
            "Export to CSV",
            data=_export_csv(record),
            file_name="job_application.csv",
            mime="text/csv",
            key="export_csv",
        )


def render_layout() -> None:
    """Streamlit page layout."""
    st.set_page_config(page_title="Job Application Tracker", layout="centered")
    st.title("Job Application Tracker")
    st.markdown("*Upload a screenshot of a confirmation email or job posting to pre-fill an application.*")

    vision_on = bool(OPENAI_API_KEY)
    ocr_on = tesseract_available()
    st.caption(
        f"Vision model: {'on' if vision_on else 'off (set OPENAI_API_KEY)'} · "
        f"OCR: {'on' if ocr_on else 'off (install Tesseract)'}"
    )
    st.divider()

    uploaded = st.file_uploader("Screenshot", type=["png", "jpg", "jpeg", "webp"], key="screenshot")
    image_url = st.text_input("…or image URL", placeholder="https://…", key="image_url")
    extract_clicked = st.button("Extract", type="primary", key="extract_btn")

    if "job" not in st.session_state:
        st.session_state["job"] = None
    if "error" not in st.session_state:
        st.session_state["error"] = None

    if extract_clicked:
        image_ref: Optional[str] = None
        if uploaded is None and image_url and image_url.strip():
            image_ref = image_url.strip()

        if uploaded is None and not image_ref:
            st.session_state["error"] = "Upload a screenshot or enter an image URL."
            st.session_state["job"] = None
        else:
            st.session_state["error"] = None
            st.session_state["reviewed"] = None
            with st.spinner("Extracting application details…"):
                if uploaded is not None:
                    st.session_state["job"] = _extract_upload(uploaded, _agent())
                else:
                    st.session_state["job"] = extract_job_data(image_ref, agent=_agent())

    if st.session_state.get("error"):
        st.error(st.session_state["error"])

    job: Optional[ExtractedJobData] = st.session_state.get("job")
    if job is None:
        if not extract_clicked:
            st.info("Add a screenshot, then click **Extract**.")
        return

    if uploaded is not None:
        st.image(uploaded, caption="Screenshot", use_container_width=True)
    _review_form(job)


if __name__ == "__main__":
    render_layout()
