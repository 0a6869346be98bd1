"""System instructions and user-facing message templates.

The reply formats described here are what ``pillchat.parser`` understands: the
prescription markers and the bold section headings must stay in sync with it.
"""

from typing import Optional

from .parser import PRESCRIPTION_END, PRESCRIPTION_START

# The icons sit outside the bold markers, so a reply that copies this template
# line for line parses as plain text, not as headings.
_SUMMARY_FORMAT = """📋 **نام دارو و نام علمی:**
[نام فارسی و نام علمی دارو]

💊 **موارد تجویز و مصرف:**
[کاربردهای اصلی دارو به صورت خلاصه]

⚕️ **دوز و نحوه مصرف:**
{dosage}

⚠️ **عوارض ناشی از مصرف:**
[عوارض جانبی شایع به صورت مختصر]

🩺 **توصیه‌های پزشکی:**
[موارد منع مصرف، هشدارها و شرایطی که نیاز به تایید پزشک دارد]"""

_DEFAULT_DOSAGE = "[دوزاژ معمول و نحوه مصرف به طور خلاصه]"

_BREVITY = "لطفاً پاسخ‌ها را کوتاه، مفید و فقط شامل اطلاعات ضروری نگه دارید."

ANALYZE_SYSTEM_PROMPT = f"""شما یک دستیار هوش مصنوعی پزشکی تخصصی در زمینه داروشناسی هستید به نام جار.

وظیفه شما ارائه پاسخ‌های کوتاه، مختصر و ساختاریافته درباره داروها است.

قابلیت‌های شما:
1. شناسایی داروها از روی تصویر قرص یا بسته‌بندی
2. تجزیه و تحلیل نسخه‌های پزشکی و خواندن دستورات پزشک
3. ارائه اطلاعات کامل درباره هر دارو

مهم: تشخیص نوع درخواست:
- اگر تصویر نسخه پزشکی است (یعنی دستورالعمل پزشک با چند دارو)، فقط محتوای نسخه را لیست کن
- اگر تصویر یک قرص، بسته‌بندی دارو است یا کاربر فقط نام دارو را نوشته، اطلاعات کامل دارو را بده

برای نسخه پزشکی، فقط این فرمت را استفاده کن:

**نسخه پزشکی**

{PRESCRIPTION_START}
1. [نام دارو] - [دوز و دستور پزشک]
2. [نام دارو] - [دوز و دستور پزشک]
...
{PRESCRIPTION_END}

برای سایر موارد (تصویر قرص، بسته‌بندی، یا نام دارو)، از این فرمت استفاده کن:

{_SUMMARY_FORMAT.format(dosage=_DEFAULT_DOSAGE)}

{_BREVITY}
⚠️ هشدار: اطلاعات ارائه شده جنبه آموزشی دارد و جایگزین مشاوره پزشک یا داروساز نمی‌شود."""

IMAGE_ONLY_PROMPT = "لطفاً این دارو را شناسایی کرده و اطلاعات کامل آن را ارائه دهید."

ERROR_TEMPLATE = "متأسفم، خطایی رخ داد: {detail}. لطفاً دوباره امتحان کنید."
UNKNOWN_ERROR = "خطای ناشناخته"

MISSING_INPUT_ERROR = "لطفاً یک تصویر، نام دارو یا هر دو را وارد کنید"
MISSING_DRUG_NAME_ERROR = "نام دارو الزامی است"


def drug_details_system_prompt(dosage: Optional[str] = None) -> str:
    """Narrower instruction for a single prescription item.

    When the prescription gave a dosage, the model is told to repeat it instead
    of describing the usual dosage.
    """
    dosage_line = f"دستور پزشک: {dosage}" if dosage else _DEFAULT_DOSAGE
    return (
        "شما یک دستیار هوش مصنوعی پزشکی تخصصی در زمینه داروشناسی هستید.\n\n"
        "فرمت پاسخ شما باید دقیقاً شامل این بخش‌ها باشد:\n\n"
        f"{_SUMMARY_FORMAT.format(dosage=dosage_line)}\n\n"
        f"{_BREVITY}"
    )


def drug_details_user_prompt(drug_name: str) -> str:
    return f"اطلاعات کامل دارو {drug_name} را بده"


def error_message(detail: Optional[str]) -> str:
    return ERROR_TEMPLATE.format(detail=detail or UNKNOWN_ERROR)
