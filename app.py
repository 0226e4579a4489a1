import html

import streamlit as st

from config import DESCRIPTION_PREVIEW_CHARS, FAVORITES_FILE, PAGE_TITLE
from controller import SpellListController
from services import fetch_spell_details
from storage import JsonFileStore
from utils import configure_logging, preview

# --- CONFIGURATION ---
st.set_page_config(page_title=PAGE_TITLE, page_icon="📜", layout="centered")
configure_logging()

# --- CUSTOM CSS ---
st.markdown("""
<style>
    .spell-name { font-size: 18px; font-weight: bold; margin-bottom: 5px; }
    .spell-desc { font-size: 16px; color: #555; margin-bottom: 10px; }
    div.stButton > button:first-child {
        width: 100%; border-radius: 5px; background-color: #007bff;
        color: #fff; font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)

# --- SESSION STATE ---
if 'controller' not in st.session_state:
    controller = SpellListController(JsonFileStore(FAVORITES_FILE))
    with st.spinner("Loading spells..."):
        controller.start().result()
    st.session_state.controller = controller
if 'details' not in st.session_state:
    st.session_state.details = {}

controller = st.session_state.controller

# --- DETAIL OVERLAY ---
@st.dialog("Spell Details", width="large", on_dismiss=controller.close_details)
def show_details(spell):
    if spell.index not in st.session_state.details:
        with st.spinner("Loading..."):
            st.session_state.details[spell.index] = fetch_spell_details(spell.index)
    details = st.session_state.details[spell.index]

    st.subheader(spell.name)
    if details is None:
        st.markdown(spell.desc or "_No description available._")
    else:
        facts = [
            ("Level", details.level), ("School", details.school),
            ("Casting Time", details.casting_time), ("Range", details.range),
            ("Duration", details.duration),
        ]
        st.caption(" • ".join(f"**{k}:** {v}" for k, v in facts if v is not None))
        st.markdown(details.spell.desc or "_No description available._")
        if details.higher_level:
            st.markdown(f"**At Higher Levels.** {details.higher_level}")
    if st.button("Close", key="close_details"):
        controller.close_details()
        st.rerun()

# --- MAIN APP ---
st.title(PAGE_TITLE)

state = controller.state
if state.error:
    st.caption("Spell list is unavailable right now.")
st.caption(f"{len(state.catalog)} spells • {len(state.favorites)} favorites")

for spell in state.catalog:
    with st.container(border=True):
        st.markdown(f"<div class='spell-name'>{html.escape(spell.name)}</div>", unsafe_allow_html=True)
        if spell.desc:
            st.markdown(
                f"<div class='spell-desc'>{html.escape(preview(spell.desc, DESCRIPTION_PREVIEW_CHARS))}</div>",
                unsafe_allow_html=True,
            )
        col_a, col_b = st.columns(2)
        with col_a:
            st.button("📖 Details", key=f"open_{spell.index}",
                      on_click=controller.open_details, args=(spell,))
        with col_b:
            label = "Remove from Favorites" if state.is_favorite(spell) else "Add to Favorites"
            st.button(label, key=f"fav_{spell.index}",
                      on_click=controller.toggle_favorite, args=(spell,))

if state.details_visible and state.selected is not None:
    show_details(state.selected)
