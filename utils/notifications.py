"""
Notifications Module - Outbound email
"""

import smtplib
import threading
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from flask import current_app
from markupsafe import escape


def email_configured():
    """True when SMTP credentials are present in the app config"""
    return bool(current_app.config.get('EMAIL_USERNAME') and current_app.config.get('EMAIL_PASSWORD'))


def send_email(recipient, subject, html_body, reply_to=None):
    """
    Send an HTML email through the configured SMTP account

    Args:
        recipient (str): Email recipient
        subject (str): Email subject
        html_body (str): HTML body
        reply_to (str, optional): Reply-To header

    Returns:
        bool: Success status
    """
    if not email_configured():
        current_app.logger.debug(f"SMTP not configured, email to {recipient} skipped")
        return False

    config = current_app.config
    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = config['EMAIL_USERNAME']
    msg['To'] = recipient
    if reply_to:
        msg['Reply-To'] = reply_to
    msg.attach(MIMEText(html_body, 'html'))

    try:
        with smtplib.SMTP(config['EMAIL_HOST'], int(config['EMAIL_PORT']), timeout=15) as server:
            server.starttls()
            server.login(config['EMAIL_USERNAME'], config['EMAIL_PASSWORD'])
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        current_app.logger.error(f"Error sending email to {recipient}: {str(e)}")
        return False

    current_app.logger.info(f"Email sent to {recipient}: {subject}")
    return True


def send_email_async(recipient, subject, html_body, reply_to=None):
    """Send an email on a background thread; failures are only logged"""
    app = current_app._get_current_object()

    def _send():
        with app.app_context():
            send_email(recipient, subject, html_body, reply_to=reply_to)

    thread = threading.Thread(target=_send)
    thread.daemon = True
    thread.start()
    return thread


def _action_email(heading, greeting, intro, url, button, footer):
    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2 style="color: #3B82F6;">{heading}</h2>
          <p>Hello {escape(greeting)},</p>
          <p>{intro}</p>
          <a href="{escape(url)}" style="background-color: #3B82F6; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block; margin: 16px 0;">
            {button}
          </a>
          <p>{footer}</p>
        </div>
    """


def password_reset_email(name, reset_url):
    return _action_email(
        'Password Reset Request', name,
        'You requested to reset your password. Click the button below to reset it:',
        reset_url, 'Reset Password',
        "This link will expire in 1 hour. If you didn't request this, please ignore this email."
    )


def verification_email(name, verification_url):
    return _action_email(
        'Verify Your Email', name,
        'Please verify your email address to complete your registration.',
        verification_url, 'Verify Email',
        'This link will expire in 24 hours.'
    )


def contact_notification_email(contact):
    return f"""
        <h3>New Contact Form Submission</h3>
        <p><strong>Name:</strong> {escape(contact.name)}</p>
        <p><strong>Email:</strong> {escape(contact.email)}</p>
        <p><strong>Subject:</strong> {escape(contact.subject)}</p>
        <p><strong>Message:</strong></p>
        <p>{escape(contact.message)}</p>
    """


def notify_admin_of_contact(contact):
    """Forward a contact submission to the site inbox if email is configured"""
    if not email_configured():
        current_app.logger.debug("SMTP not configured, contact notification skipped")
        return None
    return send_email_async(
        current_app.config['EMAIL_USERNAME'],
        f"New Contact Form: {contact.subject}",
        contact_notification_email(contact),
        reply_to=contact.email
    )
