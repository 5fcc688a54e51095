"""passmint -- Streamlit web interface."""

import streamlit as st

from passmint import (
    GenerationRequest,
    MemoryHistoryStore,
    PassmintError,
    generate,
    parse_custom_words,
)

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_KEY_ROUND = _LUCIDE.format(s=32, paths=(
    '<path d="M2.586 17.414A2 2 0 0 0 2 18.828V21a1 1 0 0 0 1 1h3'
    'a1 1 0 0 0 1-1v-1a1 1 0 0 1 1-1h1a1 1 0 0 0 1-1v-1'
    'a1 1 0 0 1 1-1h.172a2 2 0 0 0 1.414-.586l.814-.814'
    'a6.5 6.5 0 1 0-4-4z"/>'
    '<circle cx="16.5" cy="7.5" r=".5" fill="currentColor"/>'
))

LABEL_COLORS = {
    "Weak": "#d32f2f",
    "Fair": "#fbc02d",
    "Strong": "#388e3c",
    "Very Strong": "#1b5e20",
}

# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Password Generator",
    page_icon="\U0001f511",
    layout="centered",
)

# One history per browser session
if "history" not in st.session_state:
    st.session_state["history"] = MemoryHistoryStore()

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_KEY_ROUND} Password Generator</h1>',
    unsafe_allow_html=True,
)
st.caption(
    "Everything is generated locally from a cryptographic random source.  \n"
    "Strength and crack times are estimates based on how the value was built."
)

mode = st.selectbox("Mode", ["password", "passphrase", "sentence"])

# ── Mode controls ─────────────────────────────────────────────────────────

options: dict = {"mode": mode}

if mode == "password":
    col1, col2 = st.columns(2)
    with col1:
        options["length"] = st.slider("Length", 4, 64, 16)
        options["exclude"] = st.text_input("Exclude characters", "")
    with col2:
        options["lower"] = st.checkbox("Lowercase", value=True)
        options["upper"] = st.checkbox("Uppercase", value=True)
        options["digits"] = st.checkbox("Digits", value=True)
        options["symbols"] = st.checkbox("Symbols", value=True)
        options["no_ambiguous"] = st.checkbox("Avoid ambiguous (O 0 I 1 l)")
else:
    col1, col2 = st.columns(2)
    with col1:
        options["words"] = st.slider("Words", 4 if mode == "sentence" else 2, 12, 5)
        if mode == "passphrase":
            options["separator"] = st.text_input("Separator", "-") or "-"
        custom = st.text_area("Your words (comma or newline separated)", "")
        options["wordlist"] = parse_custom_words(custom)
    with col2:
        options["use_custom_only"] = st.checkbox("Use my words only")
        options["capitalize"] = st.checkbox("Capitalize words")
        options["append_digit"] = st.checkbox("Append digit")
        options["append_symbol"] = st.checkbox("Append symbol")
        options["allow_repeats"] = st.checkbox("Allow repeats")

with st.expander("Policy"):
    min_len = st.number_input("Minimum length", 0, 256, 0)
    max_len = st.number_input("Maximum length", 0, 256, 0)
    groups = st.slider("Required character groups", 0, 4, 0)
    banned = st.text_input("Banned words (comma separated)", "")
    personal = st.text_input("Your name / birth year (never allowed inside)", "")
    options["no_repeat"] = st.checkbox("Never repeat in this session", value=True)

# Converted to a Policy (and checked) by GenerationRequest.from_options
if min_len or max_len or groups or banned.strip() or personal.strip():
    options["policy"] = {
        "min_length": min_len or None,
        "max_length": max_len or None,
        "require_groups": groups,
        "banned_substrings": parse_custom_words(banned),
        "personal_info": [personal] if personal.strip() else [],
    }

# ── Generate ──────────────────────────────────────────────────────────────

if st.button("Generate", type="primary"):
    try:
        request = GenerationRequest.from_options(options)
        result = generate(request, history=st.session_state["history"])
    except PassmintError as exc:
        st.error(str(exc))
        st.stop()

    s = result.strength
    st.code(result.value, language=None)
    st.markdown(
        f"<span style='color:{LABEL_COLORS[s.label]}'>{s.label}</span>"
        f" &nbsp;\u00b7&nbsp; {s.bits:.1f} bits of entropy",
        unsafe_allow_html=True,
    )
    st.progress(s.percent / 100)
    st.markdown(
        f"**Crack time:** {s.crack_fast} (fast offline) "
        f"&nbsp;\u00b7&nbsp; {s.crack_online} (online, throttled)",
        unsafe_allow_html=True,
    )
    for w in result.warnings:
        st.info(w)
