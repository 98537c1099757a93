import logging
from decimal import Decimal
from pathlib import Path

from sqlalchemy import delete, select

from piggybank.core.exceptions import LegacyDisabled
from piggybank.core.settings import settings
from piggybank.db.models import (
    Account,
    AccountPiggyBank,
    Attachment,
    Note,
    PiggyBank,
    PiggyBankEvent,
    PiggyBankRepetition,
)
from piggybank.services.ledger import AttachmentInfo, FundingLink, SavingsGoal

from .base import BaseRepository

audit_log = logging.getLogger("audit")


class PiggyBankRepository(BaseRepository[PiggyBank]):
    """Копилки пользователя. Пользователь передаётся явно в каждый вызов."""

    def __init__(self, session, upload_dir: Path | None = None) -> None:
        super().__init__(PiggyBank, session)
        self.upload_dir = upload_dir if upload_dir is not None else settings.upload_dir

    def _owned_by(self, user_id: int):
        """Копилки, привязанные хотя бы к одному счёту пользователя."""
        return (
            select(self.model)
            .join(AccountPiggyBank, AccountPiggyBank.piggy_bank_id == self.model.id)
            .join(Account, Account.id == AccountPiggyBank.account_id)
            .where(Account.owner_id == user_id)
            .distinct()
        )

    async def find(self, user_id: int, piggy_bank_id: int) -> PiggyBank | None:
        stmt = self._owned_by(user_id).where(self.model.id == piggy_bank_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_name(self, user_id: int, name: str) -> PiggyBank | None:
        """Находит копилку по точному имени."""
        stmt = self._owned_by(user_id).where(self.model.name == name).order_by(self.model.id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_piggy_bank(
        self,
        user_id: int,
        piggy_bank_id: int | None = None,
        name: str | None = None,
    ) -> PiggyBank | None:
        """Ищет копилку сначала по id, затем по имени."""
        logging.debug("Ищем копилку.")

        if piggy_bank_id is not None:
            piggy_bank = await self.find(user_id, piggy_bank_id)
            if piggy_bank is not None:
                logging.debug(f"Копилка найдена по #{piggy_bank_id}.")
                return piggy_bank

        if name is not None:
            piggy_bank = await self.find_by_name(user_id, name)
            if piggy_bank is not None:
                logging.debug(f'Копилка найдена по имени "{name}".')
                return piggy_bank

        logging.debug("Копилка не найдена.")
        return None

    async def get_piggy_banks(self, user_id: int) -> list[PiggyBank]:
        stmt = self._owned_by(user_id).order_by(self.model.order, self.model.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, user_id: int, query: str, limit: int) -> list[PiggyBank]:
        """Поиск по части имени. Пустой запрос возвращает все копилки."""
        stmt = self._owned_by(user_id)

        if query != "":
            stmt = stmt.where(self.model.name.contains(query, autoescape=True))

        stmt = stmt.order_by(self.model.order, self.model.name).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    def to_goal(piggy_bank: PiggyBank) -> SavingsGoal:
        return SavingsGoal(
            id=piggy_bank.id,
            name=piggy_bank.name,
            target_amount=Decimal(piggy_bank.target_amount or 0),
            target_date=piggy_bank.target_date,
            start_date=piggy_bank.start_date,
            currency_id=piggy_bank.currency_id,
        )

    async def get_links(self, piggy_bank_id: int) -> list[FundingLink]:
        """Связи копилки со счетами вместе с отложенными суммами."""
        stmt = (
            select(AccountPiggyBank)
            .where(AccountPiggyBank.piggy_bank_id == piggy_bank_id)
            .order_by(AccountPiggyBank.account_id)
        )
        result = await self.session.execute(stmt)

        return [
            FundingLink(
                piggy_bank_id=link.piggy_bank_id,
                account_id=link.account_id,
                current_amount=link.current_amount,
            )
            for link in result.scalars().all()
        ]

    async def links_for(self, piggy_bank_id: int) -> list[FundingLink]:
        return await self.get_links(piggy_bank_id)

    async def get_links_for_account(self, account_id: int) -> dict[int, list[FundingLink]]:
        """Все связи всех копилок, которые пополняются с этого счёта, по id копилки."""
        funded = select(AccountPiggyBank.piggy_bank_id).where(AccountPiggyBank.account_id == account_id)
        stmt = (
            select(AccountPiggyBank)
            .where(AccountPiggyBank.piggy_bank_id.in_(funded))
            .order_by(AccountPiggyBank.piggy_bank_id, AccountPiggyBank.account_id)
        )
        result = await self.session.execute(stmt)

        grouped: dict[int, list[FundingLink]] = {}
        for link in result.scalars().all():
            grouped.setdefault(link.piggy_bank_id, []).append(
                FundingLink(
                    piggy_bank_id=link.piggy_bank_id,
                    account_id=link.account_id,
                    current_amount=link.current_amount,
                )
            )

        return grouped

    async def set_current_amount(self, piggy_bank_id: int, account_id: int, amount: Decimal) -> AccountPiggyBank:
        """Записывает сумму, отложенную в копилку на конкретном счёте."""
        stmt = select(AccountPiggyBank).where(
            AccountPiggyBank.piggy_bank_id == piggy_bank_id,
            AccountPiggyBank.account_id == account_id,
        )
        result = await self.session.execute(stmt)
        link = result.scalar_one_or_none()

        if link is None:
            link = AccountPiggyBank(piggy_bank_id=piggy_bank_id, account_id=account_id)
            self.session.add(link)

        link.current_amount = amount
        await self.session.commit()
        await self.session.refresh(link)

        return link

    async def get_events(self, piggy_bank_id: int) -> list[PiggyBankEvent]:
        stmt = (
            select(PiggyBankEvent)
            .where(PiggyBankEvent.piggy_bank_id == piggy_bank_id)
            .order_by(PiggyBankEvent.date.desc(), PiggyBankEvent.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_note_text(self, piggy_bank_id: int) -> str:
        stmt = select(Note).where(Note.piggy_bank_id == piggy_bank_id).order_by(Note.id).limit(1)
        result = await self.session.execute(stmt)
        note = result.scalar_one_or_none()

        return note.text if note is not None and note.text is not None else ""

    async def get_attachments(self, piggy_bank_id: int) -> list[AttachmentInfo]:
        """Метаданные вложений: есть ли файл на диске и текст заметки."""
        stmt = select(Attachment).where(Attachment.piggy_bank_id == piggy_bank_id).order_by(Attachment.id)
        result = await self.session.execute(stmt)

        attachments = []
        for attachment in result.scalars().all():
            notes = await self.session.execute(
                select(Note.text).where(Note.attachment_id == attachment.id).order_by(Note.id).limit(1)
            )
            notes_text = notes.scalar_one_or_none()
            attachments.append(
                AttachmentInfo(
                    id=attachment.id,
                    filename=attachment.filename,
                    title=attachment.title,
                    file_exists=(Path(self.upload_dir) / attachment.file_name()).exists(),
                    notes_text=notes_text or "",
                )
            )

        return attachments

    async def attachments_for(self, piggy_bank_id: int) -> list[AttachmentInfo]:
        return await self.get_attachments(piggy_bank_id)

    async def get_repetition(self, piggy_bank_id: int, overrule: bool = False) -> PiggyBankRepetition | None:
        if not overrule:
            raise LegacyDisabled("Повторения копилок больше не поддерживаются.")

        logging.warning("Повторения копилок больше не поддерживаются.")
        stmt = (
            select(PiggyBankRepetition)
            .where(PiggyBankRepetition.piggy_bank_id == piggy_bank_id)
            .order_by(PiggyBankRepetition.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def destroy_all(self, user_id: int) -> None:
        """Удаляет все копилки пользователя вместе со связями и событиями."""
        piggy_banks = await self.get_piggy_banks(user_id)
        ids = [piggy_bank.id for piggy_bank in piggy_banks]
        audit_log.info(f"Удаляем все копилки пользователя #{user_id}: {ids}")

        if not ids:
            return

        await self.session.execute(delete(AccountPiggyBank).where(AccountPiggyBank.piggy_bank_id.in_(ids)))
        await self.session.execute(delete(PiggyBankEvent).where(PiggyBankEvent.piggy_bank_id.in_(ids)))
        await self.session.execute(delete(PiggyBankRepetition).where(PiggyBankRepetition.piggy_bank_id.in_(ids)))
        attachment_ids = select(Attachment.id).where(Attachment.piggy_bank_id.in_(ids))
        await self.session.execute(delete(Note).where(Note.attachment_id.in_(attachment_ids)))
        await self.session.execute(delete(Note).where(Note.piggy_bank_id.in_(ids)))
        await self.session.execute(delete(Attachment).where(Attachment.piggy_bank_id.in_(ids)))
        await self.session.execute(delete(self.model).where(self.model.id.in_(ids)))

        await self.session.commit()

    async def reset_order(self, user_id: int) -> None:
        """Перенумеровывает копилки пользователя подряд, начиная с 1."""
        stmt = self._owned_by(user_id).order_by(self.model.order, self.model.name, self.model.id)
        result = await self.session.execute(stmt)

        for position, piggy_bank in enumerate(result.scalars().all(), start=1):
            if piggy_bank.order != position:
                logging.debug(f'Копилка #{piggy_bank.id} ("{piggy_bank.name}"): порядок {piggy_bank.order} -> {position}')
                piggy_bank.order = position

        await self.session.commit()
