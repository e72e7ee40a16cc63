"""
Display strings for each supported language.

Keys are dotted by area. Strings may contain str.format placeholders.
"""

EN = {
    "app.title": "Gold Price Calculator",
    "app.subtitle": "Calculate the total price of your gold items including tax per gram and provider fees",

    "item.heading": "Item {index}",
    "item.total": "Total: {amount}",
    "item.weight": "Weight (grams)",
    "item.quantity": "Quantity",
    "item.price_per_gram": "Price per gram ({currency})",
    "item.tax_type": "Tax Type",
    "item.tax_percentage": "Percentage per gram",
    "item.tax_fixed": "Fixed Amount per gram",
    "item.tax_value_percentage": "Tax Percentage per gram (%)",
    "item.tax_value_fixed": "Tax Amount per gram ({currency})",
    "item.provider_fee": "Provider Fee ({currency})",
    "item.add": "Add Item",
    "item.remove": "Remove",
    "item.removed": "Item removed",
    "item.removed_desc": "The item has been removed from your calculation.",

    "bulk.title": "Bulk Item Entry",
    "bulk.help": "One item per line: weight, quantity, price per gram, tax type, tax value, provider fee",
    "bulk.submit": "Add Items",
    "bulk.added": "Added {count} items",
    "bulk.rejected": "Skipped line {line}: {text}",
    "bulk.none": "No valid items found",

    "totals.subtotal": "Subtotal:",
    "totals.tax": "Total Tax:",
    "totals.provider_fee": "Total Provider Fees:",
    "totals.grand_total": "Grand Total:",
    "totals.empty": "No items yet. Add an item to start calculating.",
    "totals.breakdown": "View Detailed Breakdown",
    "totals.download": "Download CSV",
    "totals.clear": "Clear All",

    "goldPrices.checkPrices": "Check Gold Prices",
    "goldPrices.title": "Current Gold Prices",
    "goldPrices.apiKeyPlaceholder": "Enter your API key",
    "goldPrices.saveApiKey": "Save API Key",
    "goldPrices.apiKeySaved": "API Key Saved",
    "goldPrices.apiKeySavedDesc": "Your API key has been saved successfully.",
    "goldPrices.apiKeyMissing": "API key not found. Please set your API key first.",
    "goldPrices.refresh": "Refresh Prices",
    "goldPrices.loading": "Loading...",
    "goldPrices.fetchSuccess": "Success",
    "goldPrices.fetchSuccessDesc": "Gold prices fetched successfully.",
    "goldPrices.fetchError": "Error",
    "goldPrices.fetchErrorDesc": "Failed to fetch gold prices.",

    "language.toggle": "العربية",
}

AR = {
    "app.title": "حاسبة أسعار الذهب",
    "app.subtitle": "احسب السعر الإجمالي لقطع الذهب بما في ذلك الضريبة لكل غرام ورسوم المزود",

    "item.heading": "القطعة {index}",
    "item.total": "المجموع: {amount}",
    "item.weight": "الوزن (غرام)",
    "item.quantity": "الكمية",
    "item.price_per_gram": "السعر لكل غرام ({currency})",
    "item.tax_type": "نوع الضريبة",
    "item.tax_percentage": "نسبة مئوية لكل غرام",
    "item.tax_fixed": "مبلغ ثابت لكل غرام",
    "item.tax_value_percentage": "نسبة الضريبة لكل غرام (%)",
    "item.tax_value_fixed": "مبلغ الضريبة لكل غرام ({currency})",
    "item.provider_fee": "رسوم المزود ({currency})",
    "item.add": "إضافة قطعة",
    "item.remove": "حذف",
    "item.removed": "تم حذف القطعة",
    "item.removed_desc": "تمت إزالة القطعة من الحساب.",

    "bulk.title": "إدخال عدة قطع",
    "bulk.help": "قطعة في كل سطر: الوزن، الكمية، السعر لكل غرام، نوع الضريبة، قيمة الضريبة، رسوم المزود",
    "bulk.submit": "إضافة القطع",
    "bulk.added": "تمت إضافة {count} قطع",
    "bulk.rejected": "تم تخطي السطر {line}: {text}",
    "bulk.none": "لم يتم العثور على قطع صالحة",

    "totals.subtotal": "المجموع الفرعي:",
    "totals.tax": "إجمالي الضريبة:",
    "totals.provider_fee": "إجمالي رسوم المزود:",
    "totals.grand_total": "المجموع الكلي:",
    "totals.empty": "لا توجد قطع بعد. أضف قطعة لبدء الحساب.",
    "totals.breakdown": "عرض التفاصيل",
    "totals.download": "تنزيل CSV",
    "totals.clear": "مسح الكل",

    "goldPrices.checkPrices": "تحقق من أسعار الذهب",
    "goldPrices.title": "أسعار الذهب الحالية",
    "goldPrices.apiKeyPlaceholder": "أدخل مفتاح API",
    "goldPrices.saveApiKey": "حفظ مفتاح API",
    "goldPrices.apiKeySaved": "تم حفظ المفتاح",
    "goldPrices.apiKeySavedDesc": "تم حفظ مفتاح API بنجاح.",
    "goldPrices.apiKeyMissing": "لم يتم العثور على مفتاح API. يرجى تعيين المفتاح أولاً.",
    "goldPrices.refresh": "تحديث الأسعار",
    "goldPrices.loading": "جار التحميل...",
    "goldPrices.fetchSuccess": "نجاح",
    "goldPrices.fetchSuccessDesc": "تم جلب أسعار الذهب بنجاح.",
    "goldPrices.fetchError": "خطأ",
    "goldPrices.fetchErrorDesc": "فشل في جلب أسعار الذهب.",

    "language.toggle": "English",
}

MESSAGES = {
    "en": EN,
    "ar": AR,
}

RTL_LANGUAGES = frozenset({"ar"})
