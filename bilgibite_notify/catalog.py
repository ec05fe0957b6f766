"""Built-in BilgiBite e-mail templates (subscriptions, payments, AI credits)."""
from __future__ import annotations

from typing import List

from .models import Template
from .templates import TemplateStore

SUPPORT_ADDRESS = "destek@bilgibite.com"

_WRAPPER_OPEN = '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
_BUTTON = (
    '<div style="text-align: center; margin: 30px 0;">'
    '<a href="{href}" style="background: {color}; color: white; padding: 15px 30px; '
    'text-decoration: none; border-radius: 5px; display: inline-block;">{label}</a>'
    "</div>"
)


def _header(background: str, title: str, tagline: str, color: str = "white") -> str:
    return (
        f'<div style="background: {background}; padding: 30px; text-align: center; color: {color};">'
        f"<h1>{title}</h1>"
        f'<p style="font-size: 18px;">{tagline}</p>'
        "</div>"
    )


def _details(title: str, rows: List[str], accent: str = "") -> str:
    items = "".join(f"<li>{row}</li>" for row in rows)
    return (
        f'<div style="background: white; padding: 20px; border-radius: 10px; margin: 20px 0;{accent}">'
        f"<h3>{title}</h3><ul>{items}</ul></div>"
    )


def _text(lines: List[str]) -> str:
    return "\n".join(lines)


SUBSCRIPTION_ACTIVATED = Template(
    name="subscription-activated",
    subject="🎉 BilgiBite {{planName}} aboneliğiniz aktif!",
    html_body="".join(
        [
            _WRAPPER_OPEN,
            _header(
                "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
                "Hoş geldiniz!",
                "{{planName}} aboneliğiniz başarıyla aktif edildi",
            ),
            '<div style="padding: 30px; background: #f8f9fa;">',
            "<h2>Merhaba {{userName}},</h2>",
            "<p>{{planName}} paketiniz başarıyla aktif edildi. "
            "Artık tüm premium özelliklerimizden yararlanabilirsiniz!</p>",
            _details(
                "Paket Detayları:",
                [
                    "<strong>Plan:</strong> {{planName}}",
                    "<strong>Aylık Ücret:</strong> {{monthlyPrice}} TL",
                    "<strong>Sonraki Ödeme:</strong> {{nextPaymentDate}}",
                    "<strong>Özellikler:</strong> {{features}}",
                ],
            ),
            _BUTTON.format(href="{{appUrl}}", color="#4CAF50", label="Uygulamayı Kullanmaya Başla"),
            f"<p>Sorularınız için {SUPPORT_ADDRESS} adresinden bize ulaşabilirsiniz.</p>",
            "<p>İyi çalışmalar!</p><p><strong>BilgiBite Ekibi</strong></p>",
            "</div></div>",
        ]
    ),
    text_body=_text(
        [
            "Merhaba {{userName}},",
            "",
            "{{planName}} paketiniz başarıyla aktif edildi!",
            "",
            "Plan: {{planName}}",
            "Aylık Ücret: {{monthlyPrice}} TL",
            "Sonraki Ödeme: {{nextPaymentDate}}",
            "",
            "Uygulamayı kullanmaya başlamak için: {{appUrl}}",
            "",
            f"Sorularınız için: {SUPPORT_ADDRESS}",
            "",
            "BilgiBite Ekibi",
        ]
    ),
)

PAYMENT_FAILED = Template(
    name="payment-failed",
    subject="⚠️ BilgiBite abonelik ödemesi başarısız",
    html_body="".join(
        [
            _WRAPPER_OPEN,
            _header("#dc3545", "Ödeme Başarısız", "Abonelik ödemenizi alamadık"),
            '<div style="padding: 30px; background: #f8f9fa;">',
            "<h2>Merhaba {{userName}},</h2>",
            "<p>{{planName}} aboneliğinizin ödemesini alamadık. "
            "Aboneliğinizin kesilmemesi için ödeme yönteminizi güncelleyin.</p>",
            _details(
                "Ödeme Detayları:",
                [
                    "<strong>Miktar:</strong> {{amount}} TL",
                    "<strong>Kart Son 4 Hanesi:</strong> ****{{lastFourDigits}}",
                    "<strong>Hata:</strong> {{errorMessage}}",
                    "<strong>Tekrar Deneme:</strong> {{retryDate}}",
                ],
                accent=" border-left: 4px solid #dc3545;",
            ),
            _BUTTON.format(href="{{paymentUrl}}", color="#dc3545", label="Ödeme Yöntemini Güncelle"),
            "<p><strong>Önemli:</strong> 7 gün içinde ödeme alamazsak aboneliğiniz askıya alınacaktır.</p>",
            f"<p>Destek için: {SUPPORT_ADDRESS}</p>",
            "</div></div>",
        ]
    ),
    text_body=_text(
        [
            "Merhaba {{userName}},",
            "",
            "{{planName}} aboneliğinizin ödemesini alamadık.",
            "",
            "Miktar: {{amount}} TL",
            "Hata: {{errorMessage}}",
            "",
            "Ödeme yöntemini güncellemek için: {{paymentUrl}}",
            "",
            "7 gün içinde ödeme alamazsak aboneliğiniz askıya alınacaktır.",
            "",
            f"Destek: {SUPPORT_ADDRESS}",
            "BilgiBite Ekibi",
        ]
    ),
)

AI_CREDIT_PURCHASED = Template(
    name="ai-credit-purchased",
    subject="⚡ AI Kredi paketiniz hazır!",
    html_body="".join(
        [
            _WRAPPER_OPEN,
            _header(
                "linear-gradient(135deg, #ffd700 0%, #ffb347 100%)",
                "AI Kredi Satın Alındı!",
                "{{creditAmount}} AI kredi hesabınıza eklendi",
                color="#333",
            ),
            '<div style="padding: 30px; background: #f8f9fa;">',
            "<h2>Merhaba {{userName}},</h2>",
            "<p>{{creditAmount}} AI kredi paketiniz başarıyla satın alındı ve hesabınıza eklendi!</p>",
            _details(
                "AI Kredi Detayları:",
                [
                    "<strong>Satın Alınan:</strong> {{creditAmount}} kredi",
                    "<strong>Ödenen Tutar:</strong> {{paidAmount}} TL",
                    "<strong>Toplam Bakiye:</strong> {{totalBalance}} kredi",
                    "<strong>Geçerlilik:</strong> {{expiryDate}}",
                ],
            ),
            '<div style="background: #e3f2fd; padding: 15px; border-radius: 8px; margin: 20px 0;">',
            "<h4>AI Kredilerini Nerede Kullanabilirsiniz:</h4><ul>",
            "<li>🤖 Kişisel AI öğretmen sohbeti</li>",
            "<li>📚 Akıllı soru üretimi</li>",
            "<li>📊 Zayıf alanlar analizi</li>",
            "<li>📖 Özel çalışma planı oluşturma</li>",
            "</ul></div>",
            _BUTTON.format(href="{{aiEducationUrl}}", color="#4CAF50", label="AI Öğretmeninizi Kullanın"),
            "<p>İyi çalışmalar!</p><p><strong>BilgiBite Ekibi</strong></p>",
            "</div></div>",
        ]
    ),
    text_body=_text(
        [
            "Merhaba {{userName}},",
            "",
            "{{creditAmount}} AI kredi başarıyla satın alındı!",
            "",
            "Satın Alınan: {{creditAmount}} kredi",
            "Ödenen: {{paidAmount}} TL",
            "Toplam Bakiye: {{totalBalance}} kredi",
            "",
            "AI öğretmeni kullanmak için: {{aiEducationUrl}}",
            "",
            "BilgiBite Ekibi",
        ]
    ),
)

SUBSCRIPTION_CANCELLED = Template(
    name="subscription-cancelled",
    subject="👋 BilgiBite aboneliğiniz iptal edildi",
    html_body="".join(
        [
            _WRAPPER_OPEN,
            _header("#6c757d", "Abonelik İptal Edildi", "{{planName}} aboneliğiniz sona erdi"),
            '<div style="padding: 30px; background: #f8f9fa;">',
            "<h2>Merhaba {{userName}},</h2>",
            "<p>{{planName}} aboneliğiniz {{cancellationDate}} tarihinde iptal edilmiştir.</p>",
            _details(
                "Abonelik Detayları:",
                [
                    "<strong>İptal Edilen Plan:</strong> {{planName}}",
                    "<strong>Son Ödeme:</strong> {{lastPaymentDate}}",
                    "<strong>İptal Nedeni:</strong> {{cancellationReason}}",
                    "<strong>Geri Ödenecek Tutar:</strong> {{refundAmount}} TL",
                ],
            ),
            "<p>Ücretsiz planımızla çalışmalarınıza devam edebilirsiniz. "
            "İstediğiniz zaman tekrar premium üyelik satın alabilirsiniz.</p>",
            _BUTTON.format(href="{{reactivateUrl}}", color="#007bff", label="Aboneliği Yeniden Başlat"),
            f"<p>Geri bildirimleriniz bizim için değerli: {SUPPORT_ADDRESS}</p>",
            "<p><strong>BilgiBite Ekibi</strong></p>",
            "</div></div>",
        ]
    ),
    text_body=_text(
        [
            "Merhaba {{userName}},",
            "",
            "{{planName}} aboneliğiniz iptal edildi.",
            "",
            "İptal Tarihi: {{cancellationDate}}",
            "Son Ödeme: {{lastPaymentDate}}",
            "Geri Ödenecek: {{refundAmount}} TL",
            "",
            "Ücretsiz planla devam edebilir, istediğiniz zaman yeniden başlatabilirsiniz.",
            "",
            "Yeniden başlatmak için: {{reactivateUrl}}",
            "",
            "BilgiBite Ekibi",
        ]
    ),
)

DEFAULT_TEMPLATES = [
    SUBSCRIPTION_ACTIVATED,
    PAYMENT_FAILED,
    AI_CREDIT_PURCHASED,
    SUBSCRIPTION_CANCELLED,
]


def register_default_templates(store: TemplateStore) -> TemplateStore:
    for template in DEFAULT_TEMPLATES:
        store.register(template.name, template)
    return store


__all__ = [
    "DEFAULT_TEMPLATES",
    "SUBSCRIPTION_ACTIVATED",
    "PAYMENT_FAILED",
    "AI_CREDIT_PURCHASED",
    "SUBSCRIPTION_CANCELLED",
    "register_default_templates",
]
