"""
User-facing (Arabic) messages returned by the API.
"""

UNAUTHORIZED = 'غير مصرح'

ALL_FIELDS_REQUIRED = 'جميع الحقول مطلوبة'
INQUIRY_FIELDS_REQUIRED = 'البريد والرسالة مطلوبان'
CREDENTIALS_REQUIRED = 'بيانات الدخول مطلوبة'
INVALID_CREDENTIALS = 'بيانات الدخول غير صحيحة'
STATUS_FIELDS_REQUIRED = 'معرّف الطلب والحالة مطلوبان'
ORDER_ID_REQUIRED = 'معرّف الطلب مطلوب'
INQUIRY_ID_REQUIRED = 'معرّف الاستفسار مطلوب'
SUGGESTION_ID_REQUIRED = 'معرّف الاقتراح مطلوب'
SCREENSHOT_TOO_LARGE = 'حجم الصورة يتجاوز 3 ميجابايت'
REQUEST_TOO_LARGE = 'حجم الطلب كبير جداً'

ORDER_SAVE_FAILED = 'حدث خطأ أثناء الحفظ'
INQUIRY_SAVE_FAILED = 'فشل إرسال البريد الإلكتروني'
SUGGESTION_SAVE_FAILED = 'فشل إرسال الاقتراح'
DATABASE_ERROR = 'خطأ في قاعدة البيانات'
UPDATE_FAILED = 'حدث خطأ أثناء التحديث'
DELETE_FAILED = 'حدث خطأ أثناء الحذف'
REPLY_FAILED = 'فشل إرسال الرد'
MESSAGE_FAILED = 'فشل إرسال الرسالة'

NOT_FOUND = 'المسار غير موجود'
METHOD_NOT_ALLOWED = 'الطريقة غير مسموحة'
SERVER_ERROR = 'حدث خطأ في الخادم'

# Email subjects
NEW_ORDER_SUBJECT = 'طلب جديد'
NEW_INQUIRY_SUBJECT = 'استفسار جديد من العميل'
NEW_SUGGESTION_SUBJECT = 'اقتراح جديد للموقع'
REPLY_SUBJECT = 'رد على استفسارك'
