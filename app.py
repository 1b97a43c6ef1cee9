import streamlit as st
import pandas as pd
import os
import json
import re

from errors import InvalidInputError
from models import KeywordInput, TAG_CATEGORY_DESCRIPTIONS
from tag_optimizer import DEFAULT_MAX_TAGS, generate_tags

# --- Persistence Manager ---
CONFIG_FILE = 'tag_generator_config.json'

FORM_DEFAULTS = {
    'concept': '',
    'title': '',
    'channel_name': '',
    'niche': '',
    'primary_text': '',
    'secondary_text': '',
    'long_tail_text': '',
    'max_tags': DEFAULT_MAX_TAGS,
    'include_misspellings': True
}


def load_config():
    """Load the last-used form values from file."""
    if os.path.exists(CONFIG_FILE):
        try:
            with open(CONFIG_FILE, 'r') as f:
                return json.load(f)
        except (OSError, ValueError):
            return {}
    return {}


def save_config():
    """Save the current form values to file."""
    state = {key: st.session_state.get(key, default) for key, default in FORM_DEFAULTS.items()}
    try:
        with open(CONFIG_FILE, 'w') as f:
            json.dump(state, f)
    except OSError as e:
        st.warning(f"Could not save settings: {e}")


def display_metrics(metrics_dict: dict, cols: int = 4):
    """Display metrics in a row of columns."""
    columns = st.columns(cols)
    for i, (label, value) in enumerate(metrics_dict.items()):
        columns[i % cols].metric(label, value)


def parse_keyword_text(text: str) -> list:
    """Split comma/newline separated keywords into analyzer-style records."""
    if not text:
        return []
    keywords = [kw.strip() for kw in re.split(r'[,\n]', text)]
    return [{"keyword": kw} for kw in keywords if kw]


def build_tag_table(result: dict) -> pd.DataFrame:
    """Ranked tags as a DataFrame with a 1-based rank column."""
    df = pd.DataFrame(result.get("tags", []), columns=["tag", "category", "priority", "reason"])
    df.insert(0, "rank", range(1, len(df) + 1))
    df["category"] = df["category"].map(
        lambda c: TAG_CATEGORY_DESCRIPTIONS.get(c, c) if isinstance(c, str) else c
    )
    return df


def render_result(result: dict):
    stats = result["statistics"]
    validation = result["validation"]

    display_metrics({
        "Tags": stats["totalTags"],
        "Characters": f"{stats['totalCharacters']} / {validation['characterLimit']}",
        "Remaining": validation["charactersRemaining"],
        "Avg Length": stats["averageTagLength"]
    })

    st.divider()
    tabs = st.tabs(["🏷️ Ranked Tags", "✅ Validation", "💡 Tips"])

    with tabs[0]:
        st.dataframe(build_tag_table(result), width="stretch", hide_index=True)
        st.subheader("📋 Copy These Tags")
        st.code(result["copyPasteFormat"], language=None)

    with tabs[1]:
        if validation["valid"]:
            st.success("Tags are within YouTube's limits")
        for issue in validation["issues"]:
            if issue["type"] == "error":
                st.error(issue["message"])
            else:
                st.warning(issue["message"])

        st.subheader("Recommendations")
        for rec in result["recommendations"]:
            st.markdown(f"- {rec}")

        if stats["byCategory"]:
            st.bar_chart(pd.Series(stats["byCategory"], name="tags"))

    with tabs[2]:
        for tip in result["tips"]:
            st.markdown(f"- {tip}")


def main():
    st.set_page_config(page_title="YouTube Tag Generator", page_icon="🏷️", layout="wide")
    config = load_config()

    st.sidebar.title("🏷️ Tag Generator")

    with st.sidebar.expander("🎬 Video", expanded=True):
        st.text_input("Concept", value=config.get('concept', ''), key="concept", on_change=save_config)
        st.text_input("Title", value=config.get('title', ''), key="title", on_change=save_config)
        st.text_input("Channel Name", value=config.get('channel_name', ''), key="channel_name", on_change=save_config)
        st.text_input("Niche", value=config.get('niche', ''), key="niche", on_change=save_config)

    with st.sidebar.expander("🔑 Keywords", expanded=True):
        st.text_area("Primary Keywords", value=config.get('primary_text', ''), key="primary_text", on_change=save_config)
        st.text_area("Secondary Keywords", value=config.get('secondary_text', ''), key="secondary_text", on_change=save_config)
        st.text_area("Long-Tail Keywords", value=config.get('long_tail_text', ''), key="long_tail_text", on_change=save_config)

    with st.sidebar.expander("⚙️ Options", expanded=True):
        st.slider("Max Tags", 5, 30, int(config.get('max_tags', DEFAULT_MAX_TAGS)), key="max_tags", on_change=save_config)
        st.checkbox("Include Misspellings", value=config.get('include_misspellings', True), key="include_misspellings", on_change=save_config)

    st.subheader("🏷️ YouTube Tag Generator")
    st.caption("Ranked, deduplicated tags from your concept, title and analyzed keywords")

    if st.button("Generate Tags", type="primary"):
        keywords = KeywordInput(
            primary=parse_keyword_text(st.session_state.get('primary_text', '')),
            secondary=parse_keyword_text(st.session_state.get('secondary_text', '')),
            longTail=parse_keyword_text(st.session_state.get('long_tail_text', ''))
        )
        try:
            result = generate_tags(
                st.session_state.get('concept', '').strip(),
                title=st.session_state.get('title') or None,
                keywords=keywords,
                channel_name=st.session_state.get('channel_name') or None,
                niche=st.session_state.get('niche') or None,
                max_tags=st.session_state.get('max_tags', DEFAULT_MAX_TAGS),
                include_misspellings=st.session_state.get('include_misspellings', True)
            )
        except InvalidInputError as e:
            st.error(f"Error: {e}")
        else:
            render_result(result)


if __name__ == "__main__":
    main()
