class PaymentStatus:
    BELUM_BAYAR = "Belum Bayar"
    DP_TERBAYAR = "DP Terbayar"
    LUNAS = "Lunas"

    ALL = {BELUM_BAYAR, DP_TERBAYAR, LUNAS}


class ClientStatus:
    LEAD = "Prospek"
    ACTIVE = "Aktif"
    INACTIVE = "Tidak Aktif"
    LOST = "Hilang"

    ALL = {LEAD, ACTIVE, INACTIVE, LOST}


class ClientType:
    DIRECT = "Langsung"
    VENDOR = "Vendor"

    ALL = {DIRECT, VENDOR}


class LeadStatus:
    DISCUSSION = "Sedang Diskusi"
    FOLLOW_UP = "Menunggu Follow Up"
    CONVERTED = "Dikonversi"
    REJECTED = "Ditolak"

    ALL = {DISCUSSION, FOLLOW_UP, CONVERTED, REJECTED}


class ContactChannel:
    WHATSAPP = "WhatsApp"
    INSTAGRAM = "Instagram"
    WEBSITE = "Website"
    PHONE = "Telepon"
    REFERRAL = "Referensi"
    SUGGESTION_FORM = "Form Saran"
    OTHER = "Lainnya"

    ALL = {WHATSAPP, INSTAGRAM, WEBSITE, PHONE, REFERRAL, SUGGESTION_FORM, OTHER}


class BookingStatus:
    BARU = "Baru"
    TERKONFIRMASI = "Terkonfirmasi"
    DITOLAK = "Ditolak"

    ALL = {BARU, TERKONFIRMASI, DITOLAK}


class TransactionType:
    INCOME = "Pemasukan"
    EXPENSE = "Pengeluaran"

    ALL = {INCOME, EXPENSE}


class SatisfactionLevel:
    VERY_SATISFIED = "Sangat Puas"
    SATISFIED = "Puas"
    NEUTRAL = "Biasa Saja"
    UNSATISFIED = "Tidak Puas"

    ALL = {VERY_SATISFIED, SATISFIED, NEUTRAL, UNSATISFIED}


class DiscountType:
    PERCENTAGE = "percentage"
    FIXED = "fixed"

    ALL = {PERCENTAGE, FIXED}


PROJECT_STATUS_CONFIRMED = "Dikonfirmasi"
DP_CATEGORY = "DP Proyek"
DP_METHOD = "Transfer Bank"
