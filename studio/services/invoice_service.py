from decimal import Decimal
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from studio.formatting import format_currency
from studio.services.profile_service import ProfileService


class InvoiceService:
    @staticmethod
    def invoice_number(project):
        return f"INV-{project.user_id}-{project.id:05d}"

    @staticmethod
    def build_invoice(project, profile=None):
        profile = profile or ProfileService.get_profile(project.user_id)
        total = Decimal(project.total_cost or 0)
        paid = Decimal(project.amount_paid or 0)
        discount = Decimal(project.discount_amount or 0)

        def money(value):
            return format_currency(value, locale=profile.currency_locale, currency=profile.currency_code)

        lines = [{"description": f"Paket {project.package_name}" if project.package_name else project.project_name}]
        for item in project.add_ons or []:
            lines.append({"description": f"Add-on {item.get('name', '')}", "amount": money(item.get("price"))})

        return {
            "number": InvoiceService.invoice_number(project),
            "studio": profile.company_name,
            "bank_account": profile.bank_account,
            "authorized_signer": profile.authorized_signer,
            "client_name": project.client_name,
            "project_name": project.project_name,
            "date": project.date.strftime("%d/%m/%Y"),
            "location": project.location,
            "lines": lines,
            "discount": money(discount) if discount > 0 else None,
            "total": money(total),
            "amount_paid": money(paid),
            "balance_due": money(max(Decimal("0"), total - paid)),
            "payment_status": project.payment_status,
        }

    @staticmethod
    def render_pdf(invoice):
        buffer = BytesIO()
        p = canvas.Canvas(buffer, pagesize=A4)
        width, height = A4

        y = height - 60
        p.setFont("Helvetica-Bold", 22)
        p.drawString(50, y, invoice["studio"] or "Invoice")

        y -= 30
        p.setFont("Helvetica", 12)
        header = [
            f"Invoice: {invoice['number']}",
            f"Klien: {invoice['client_name']}",
            f"Acara: {invoice['project_name']}",
            f"Tanggal: {invoice['date']}",
            f"Lokasi: {invoice['location']}",
        ]
        for line in header:
            p.drawString(50, y, line)
            y -= 20

        y -= 10
        for item in invoice["lines"]:
            p.drawString(50, y, item["description"])
            if item.get("amount"):
                p.drawRightString(width - 50, y, item["amount"])
            y -= 20

        y -= 10
        totals = []
        if invoice["discount"]:
            totals.append(("Diskon", f"- {invoice['discount']}"))
        totals.extend(
            [
                ("Total", invoice["total"]),
                ("Sudah Dibayar", invoice["amount_paid"]),
                ("Sisa Tagihan", invoice["balance_due"]),
                ("Status", invoice["payment_status"]),
            ]
        )
        p.setFont("Helvetica-Bold", 12)
        for label, value in totals:
            p.drawString(50, y, label)
            p.drawRightString(width - 50, y, value)
            y -= 20

        if invoice["bank_account"]:
            y -= 20
            p.setFont("Helvetica", 10)
            p.drawString(50, y, f"Pembayaran ke: {invoice['bank_account']}")

        p.showPage()
        p.save()
        buffer.seek(0)
        return buffer.getvalue()
