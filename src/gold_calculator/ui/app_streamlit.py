"""
Streamlit UI for the Gold Price Calculator.

Features:
- Line item cards with live per-item totals
- Percentage or fixed per-gram tax per item
- Bulk item entry
- Grand totals with detailed breakdown and CSV export
- Gold price lookup panel (display only)
- English / Arabic with right-to-left layout
"""
import streamlit as st

from gold_calculator.config.logging_setup import configure_logging
from gold_calculator.config.settings import get_settings
from gold_calculator.engine import PricingEngine, TaxMode
from gold_calculator.i18n.locale import get_locale
from gold_calculator.services.bulk_entry import parse_bulk_text
from gold_calculator.services.export import result_to_csv, result_to_frame
from gold_calculator.services.item_collection import CalculatorSession
from gold_calculator.services.notifications import Notifier
from gold_calculator.services.price_feed import MISSING_CREDENTIAL, GoldPriceService


st.set_page_config(
    page_title="Gold Price Calculator",
    layout="centered",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    configure_logging()
    return get_settings()


@st.cache_resource
def get_price_service():
    """Get cached price lookup service."""
    return GoldPriceService.from_settings(get_settings_cached())


try:
    settings = get_settings_cached()
    price_service = get_price_service()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SESSION STATE
# ============================================================================
if 'locale' not in st.session_state:
    st.session_state.locale = get_locale(settings.default_language)

if 'calculator' not in st.session_state:
    st.session_state.calculator = CalculatorSession(
        default_price_per_gram=settings.default_price_per_gram,
        engine=PricingEngine(currency=settings.currency_symbol),
        notifier=Notifier(),
        locale=st.session_state.locale,
    )

if 'price_quote' not in st.session_state:
    st.session_state.price_quote = None

locale = st.session_state.locale
calculator: CalculatorSession = st.session_state.calculator
t = locale.t
cur = settings.currency_symbol


def money(amount: float) -> str:
    return f"{cur}{amount:,.2f}"


# ============================================================================
# CALLBACKS
# ============================================================================
def on_field_change(item_id: str, field_name: str):
    """Push a widget's value into the item collection."""
    value = st.session_state[f"{field_name}-{item_id}"]
    calculator.update_item(item_id, field_name, value)


def on_remove(item_id: str):
    calculator.remove_item(item_id)


def on_toggle_language():
    new_locale = st.session_state.locale.toggled()
    st.session_state.locale = new_locale
    st.session_state.calculator.locale = new_locale


# ============================================================================
# CUSTOM CSS & STYLING
# ============================================================================
direction_css = "direction: rtl; text-align: right;" if locale.is_rtl else ""
st.markdown(f"""
    <style>
        .block-container {{
            padding-top: 2rem;
            padding-bottom: 2rem;
            {direction_css}
        }}
        h1 {{
            font-weight: 700;
            color: #3d2c00;
        }}
        .stMetric {{
            background-color: #fbf6e9;
            padding: 10px;
            border-radius: 5px;
            border-left: 5px solid #d4af37;
        }}
    </style>
""", unsafe_allow_html=True)


# ============================================================================
# SIDEBAR: Language & Gold Prices
# ============================================================================
with st.sidebar:
    st.button(t("language.toggle"), on_click=on_toggle_language, use_container_width=True)

    st.divider()
    st.header(t("goldPrices.title"))

    with st.container(border=True):
        if not price_service.has_credential():
            api_key = st.text_input(
                t("goldPrices.apiKeyPlaceholder"),
                type="password",
                label_visibility="collapsed",
                placeholder=t("goldPrices.apiKeyPlaceholder"),
            )
            if st.button(t("goldPrices.saveApiKey"), use_container_width=True):
                if api_key.strip():
                    price_service.credentials.save(api_key)
                    calculator.notifier.notify(t("goldPrices.apiKeySaved"), t("goldPrices.apiKeySavedDesc"))
                    st.rerun()
        else:
            if st.button(t("goldPrices.refresh"), type="primary", use_container_width=True):
                with st.spinner(t("goldPrices.loading")):
                    quote = price_service.fetch_quote_sync()
                if quote.success:
                    st.session_state.price_quote = quote.data
                    calculator.notifier.notify(t("goldPrices.fetchSuccess"), t("goldPrices.fetchSuccessDesc"))
                else:
                    description = quote.error_message or t("goldPrices.fetchErrorDesc")
                    if quote.error_code == MISSING_CREDENTIAL:
                        description = t("goldPrices.apiKeyMissing")
                    calculator.notifier.error(t("goldPrices.fetchError"), description)

            if st.session_state.price_quote:
                with st.expander(t("goldPrices.checkPrices"), expanded=True):
                    st.json(st.session_state.price_quote)


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title(t("app.title"))
st.caption(t("app.subtitle"))

result = calculator.calculate()

for index, line in enumerate(result.lines, start=1):
    item = line.item
    with st.container(border=True):
        head_col, total_col, remove_col = st.columns([3, 2, 1])
        head_col.subheader(t("item.heading", index=index))
        total_col.markdown(f"**{t('item.total', amount=money(line.totals.total))}**")
        remove_col.button(
            "🗑️",
            key=f"remove-{item.id}",
            help=t("item.remove"),
            on_click=on_remove,
            args=(item.id,),
        )

        left, right = st.columns(2)
        with left:
            st.number_input(
                t("item.weight"), min_value=0.0, step=0.1, value=float(item.weight),
                key=f"weight-{item.id}", on_change=on_field_change, args=(item.id, 'weight'),
            )
            st.number_input(
                t("item.quantity"), min_value=1, step=1, value=int(item.quantity),
                key=f"quantity-{item.id}", on_change=on_field_change, args=(item.id, 'quantity'),
            )
            st.number_input(
                t("item.price_per_gram", currency=cur), min_value=0.0, step=0.01,
                value=float(item.price_per_gram),
                key=f"price_per_gram-{item.id}", on_change=on_field_change, args=(item.id, 'price_per_gram'),
            )
        with right:
            modes = [TaxMode.PERCENTAGE.value, TaxMode.FIXED.value]
            st.radio(
                t("item.tax_type"),
                options=modes,
                index=modes.index(item.tax_mode.value),
                format_func=lambda m: t("item.tax_percentage") if m == TaxMode.PERCENTAGE.value else t("item.tax_fixed"),
                horizontal=True,
                key=f"tax_mode-{item.id}", on_change=on_field_change, args=(item.id, 'tax_mode'),
            )
            tax_label = (
                t("item.tax_value_percentage")
                if item.tax_mode is TaxMode.PERCENTAGE
                else t("item.tax_value_fixed", currency=cur)
            )
            st.number_input(
                tax_label, min_value=0.0, step=0.01, value=float(item.tax_value),
                key=f"tax_value-{item.id}", on_change=on_field_change, args=(item.id, 'tax_value'),
            )
            st.number_input(
                t("item.provider_fee", currency=cur), min_value=0.0, step=0.01,
                value=float(item.provider_fee),
                key=f"provider_fee-{item.id}", on_change=on_field_change, args=(item.id, 'provider_fee'),
            )

if st.button(f"➕ {t('item.add')}", type="primary", use_container_width=True):
    calculator.add_item()
    st.rerun()

with st.expander(f"📋 {t('bulk.title')}"):
    st.caption(t("bulk.help"))
    bulk_text = st.text_area(
        t("bulk.title"),
        height=100,
        placeholder="10, 1, 60, percentage, 5\n2.5, 4, 58, fixed, 1.5, 10",
        label_visibility="collapsed",
    )
    if st.button(t("bulk.submit")):
        if bulk_text.strip():
            parsed = parse_bulk_text(bulk_text, settings.default_price_per_gram)
            for rejected in parsed.rejected:
                st.warning(t("bulk.rejected", line=rejected.line_number, text=rejected.text))
            if parsed.items:
                try:
                    calculator.extend(parsed.items)
                except ValueError as e:
                    st.error(str(e))
                else:
                    calculator.notifier.notify(t("bulk.added", count=len(parsed.items)))
                    st.rerun()
            else:
                st.warning(t("bulk.none"))


# ============================================================================
# GRAND TOTALS
# ============================================================================
result = calculator.calculate()

if result.is_empty:
    st.info(t("totals.empty"))
else:
    with st.container(border=True):
        totals = result.totals
        m1, m2, m3 = st.columns(3)
        m1.metric(t("totals.subtotal"), money(totals.subtotal))
        m2.metric(t("totals.tax"), money(totals.tax))
        m3.metric(t("totals.provider_fee"), money(totals.provider_fee))
        st.divider()
        st.markdown(f"### {t('totals.grand_total')} {money(totals.total)}")

        btn_col1, btn_col2 = st.columns(2)
        with btn_col1:
            st.download_button(
                f"📥 {t('totals.download')}",
                data=result_to_csv(result),
                file_name="gold_calculation.csv",
                mime="text/csv",
                use_container_width=True,
            )
        with btn_col2:
            if st.button(f"🗑️ {t('totals.clear')}", use_container_width=True):
                calculator.clear()
                st.rerun()

    with st.expander(f"📊 {t('totals.breakdown')}"):
        st.dataframe(result_to_frame(result), use_container_width=True, hide_index=True)
        for index, line in enumerate(result.lines, start=1):
            st.caption(t("item.heading", index=index))
            st.code(line.get_trace_text(), language=None)


# ============================================================================
# NOTIFICATIONS
# ============================================================================
for note in calculator.notifier.drain():
    icon = "⚠️" if note.is_error else "✅"
    st.toast(f"**{note.title}** {note.description}", icon=icon)
