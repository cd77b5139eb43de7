import logging
import smtplib
from datetime import UTC, datetime, timedelta
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from app.core.config import settings
from app.services.slot_service import business_tz

logger = logging.getLogger(__name__)


def _send_email_sync(to_email: str, subject: str, html_body: str) -> None:
    """Send email via SMTP (blocking). Use from background task."""
    if not settings.email_enabled:
        logger.debug("Email disabled (SMTP not configured), skipping send to %s", to_email)
        return
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.from_name} <{settings.from_email}>"
    msg["To"] = to_email
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
            server.starttls()
            server.login(settings.smtp_user, settings.smtp_password)
            server.sendmail(settings.from_email, [to_email], msg.as_string())
        logger.info("Email sent to %s", to_email)
    except Exception as e:
        logger.exception("Failed to send email to %s: %s", to_email, e)


def _html_escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def build_appointment_confirmation_html(
    recipient_name: str,
    service_name: str,
    scheduled_at: datetime,
    duration_minutes: int,
    location: str | None,
) -> str:
    """Build HTML body for appointment confirmation. scheduled_at is naive UTC and is
    shown in the business time zone."""
    local_start = scheduled_at.replace(tzinfo=UTC).astimezone(business_tz())
    local_end = local_start + timedelta(minutes=duration_minutes)
    date_str = local_start.strftime("%A, %B %d, %Y")
    slot_display = f"{local_start.strftime('%I:%M %p')} - {local_end.strftime('%I:%M %p')} ({settings.business_timezone})"
    location_section = ""
    if location:
        location_section = f"""
                    <p style="margin:12px 0 0 0;font-size:12px;text-transform:uppercase;color:#6b7280;">Location</p>
                    <p style="margin:0;font-size:16px;font-weight:600;color:#111827;">{_html_escape(location)}</p>"""
    return f"""
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Appointment Confirmation</title>
</head>
<body style="margin:0;padding:0;font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,sans-serif;background-color:#f3f4f6;">
  <table role="presentation" width="100%" cellspacing="0" cellpadding="0" style="background-color:#f3f4f6;">
    <tr>
      <td align="center" style="padding:40px 16px;">
        <table role="presentation" width="100%" cellspacing="0" cellpadding="0" style="max-width:560px;background:#ffffff;border-radius:12px;overflow:hidden;">
          <tr>
            <td style="padding:32px 32px 24px 32px;">
              <h1 style="margin:0 0 8px 0;font-size:22px;font-weight:600;color:#111827;">Appointment Confirmed: {_html_escape(service_name)}</h1>
              <p style="margin:0 0 24px 0;font-size:15px;color:#6b7280;">Hi {recipient_name or 'there'}, your session is booked.</p>
              <table role="presentation" width="100%" cellspacing="0" cellpadding="0" style="background:#f9fafb;border-radius:8px;margin-bottom:24px;">
                <tr>
                  <td style="padding:20px 24px;">
                    <p style="margin:0 0 8px 0;font-size:12px;text-transform:uppercase;color:#6b7280;">Date</p>
                    <p style="margin:0;font-size:16px;font-weight:600;color:#111827;">{date_str}</p>
                    <p style="margin:12px 0 0 0;font-size:12px;text-transform:uppercase;color:#6b7280;">Time ({duration_minutes}-minute session)</p>
                    <p style="margin:0;font-size:16px;font-weight:600;color:#111827;">{slot_display}</p>{location_section}
                  </td>
                </tr>
              </table>
              <p style="margin:0 0 8px 0;font-size:14px;color:#374151;">To reschedule or cancel, visit your dashboard: <a href="{settings.app_url}/dashboard">{settings.app_url}/dashboard</a></p>
            </td>
          </tr>
          <tr>
            <td style="padding:24px 32px 32px 32px;background:#f9fafb;border-top:1px solid #e5e7eb;">
              <p style="margin:0 0 4px 0;font-size:13px;font-weight:600;color:#111827;">{settings.site_name}</p>
              <p style="margin:0;font-size:13px;color:#6b7280;">
                {settings.contact_email} &nbsp;·&nbsp; {settings.contact_phone}<br>
                {settings.contact_address}
              </p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


def send_appointment_confirmation_email(
    to_email: str,
    recipient_name: str | None,
    service_name: str,
    scheduled_at: datetime,
    duration_minutes: int,
    location: str | None = None,
) -> None:
    """Compose and send appointment confirmation (call from background task)."""
    subject = f"Appointment Confirmed: {service_name}"
    html = build_appointment_confirmation_html(
        recipient_name=_html_escape(recipient_name or ""),
        service_name=service_name,
        scheduled_at=scheduled_at,
        duration_minutes=duration_minutes,
        location=location,
    )
    _send_email_sync(to_email, subject, html)
