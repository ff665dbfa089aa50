# ================================
# AWS SES EMAIL SERVICE (utils/email.py)
# ================================

import boto3
from botocore.exceptions import ClientError
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.concurrency import run_in_threadpool
from typing import List, Optional, Dict, Any
import logging
import smtplib

from office_api.config import settings
from office_api.core.exceptions import NotificationDeliveryError

logger = logging.getLogger(__name__)

class EmailService:
    """AWS SES email service with SMTP fallback"""

    def __init__(self):
        self.ses_client = None
        self.template_env = None
        self._initialize_clients()

    def _initialize_clients(self):
        """Initializes the AWS SES client and the template engine"""
        try:
            if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
                self.ses_client = boto3.client(
                    'ses',
                    aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                    aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                    region_name=settings.AWS_REGION
                )
                logger.info("AWS SES client initialized successfully")
            else:
                logger.warning("AWS credentials not provided, SES will not be available")

            self.template_env = Environment(
                loader=FileSystemLoader(settings.EMAIL_TEMPLATES_DIR),
                autoescape=select_autoescape(['html', 'xml'])
            )

        except Exception as e:
            logger.error(f"Failed to initialize email service: {e}")

    async def send_email(
        self,
        to_emails: List[str],
        subject: str,
        template_name: str,
        template_data: Dict[str, Any],
        reply_to: Optional[str] = None
    ) -> None:
        """
        Sends a templated email via SES, falling back to SMTP.

        Raises:
            NotificationDeliveryError: when no transport accepted the message
        """
        html_content = await self._render_template(f"{template_name}.html", template_data)
        text_content = await self._render_template(f"{template_name}.txt", template_data)

        from_address = self._format_email_address(
            settings.AWS_SES_FROM_EMAIL,
            settings.AWS_SES_FROM_NAME
        )

        if self.ses_client:
            if await self._send_via_ses(to_emails, subject, html_content, text_content, from_address, reply_to):
                return
            logger.warning("SES failed, attempting SMTP fallback")

        if await self._send_via_smtp(to_emails, subject, html_content, text_content, from_address, reply_to):
            return

        raise NotificationDeliveryError(f"Could not deliver '{subject}' to {', '.join(to_emails)}")

    async def _send_via_ses(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: str,
        from_address: str,
        reply_to: Optional[str] = None
    ) -> bool:
        """Sends an email through AWS SES"""
        send_params = {
            'Source': from_address,
            'Destination': {'ToAddresses': to_emails},
            'Message': {
                'Subject': {'Data': subject, 'Charset': 'UTF-8'},
                'Body': {
                    'Html': {'Data': html_content, 'Charset': 'UTF-8'},
                    'Text': {'Data': text_content, 'Charset': 'UTF-8'}
                }
            }
        }

        if reply_to:
            send_params['ReplyToAddresses'] = [reply_to]

        if settings.AWS_SES_CONFIGURATION_SET:
            send_params['ConfigurationSetName'] = settings.AWS_SES_CONFIGURATION_SET

        try:
            response = await run_in_threadpool(self.ses_client.send_email, **send_params)
            logger.info(f"Email sent via SES. MessageId: {response['MessageId']}")
            return True

        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"SES sending failed: {error_code} - {e.response['Error']['Message']}")
            return False

    async def _send_via_smtp(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: str,
        from_address: str,
        reply_to: Optional[str] = None
    ) -> bool:
        """Fallback SMTP delivery"""

        if not settings.SMTP_HOST:
            logger.error("No SMTP configuration available")
            return False

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = from_address
        msg['To'] = ', '.join(to_emails)
        if reply_to:
            msg['Reply-To'] = reply_to

        msg.attach(MIMEText(text_content, 'plain', 'utf-8'))
        msg.attach(MIMEText(html_content, 'html', 'utf-8'))

        try:
            await run_in_threadpool(self._deliver_smtp, msg, to_emails)
            logger.info("Email sent via SMTP fallback")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP sending failed: {e}")
            return False

    def _deliver_smtp(self, msg: MIMEMultipart, to_emails: List[str]) -> None:
        """Blocking SMTP session; run off the event loop"""
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
            server.starttls()
            if settings.SMTP_USERNAME and settings.SMTP_PASSWORD:
                server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
            server.send_message(msg, to_addrs=to_emails)

    async def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """Renders a Jinja2 template"""
        try:
            template = self.template_env.get_template(template_name)
            return template.render(**data)
        except Exception as e:
            logger.error(f"Template rendering failed for {template_name}: {e}")
            return ""

    def _format_email_address(self, email: str, name: str = None) -> str:
        """Formats an email address with an optional display name"""
        if name:
            return f"{name} <{email}>"
        return email

    # ================================
    # Predefined emails
    # ================================

    async def send_office_pending_approval(
        self,
        to_email: str,
        reviewer_name: str,
        office: Dict[str, Any]
    ) -> None:
        """Asks the reviewer to approve an office that went back to pending"""

        template_data = {
            'reviewer_name': reviewer_name,
            'office': office,
            'office_url': f"{settings.FRONTEND_URL}/offices/{office['id']}",
            'app_name': settings.APP_NAME
        }

        await self.send_email(
            to_emails=[to_email],
            subject=f"Office pending approval: {office['title']}",
            template_name="office_pending_approval",
            template_data=template_data,
            reply_to=settings.AWS_SES_REPLY_TO
        )

# Singleton Instance
email_service = EmailService()
