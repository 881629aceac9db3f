from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from tocs.db.models.folder import Folder
from tocs.db.repositories.base_repo import BaseRepository


class FolderRepository(BaseRepository):
    def list_folders(self, project_id: str) -> list[Folder]:
        stmt = (
            select(Folder)
            .where(Folder.project_id == project_id)
            .options(selectinload(Folder.children), selectinload(Folder.endpoints))
            .order_by(Folder.sort_order.asc(), Folder.created_at.asc())
        )
        return list(self.db.scalars(stmt).all())

    def get_folder(self, project_id: str, folder_id: str) -> Folder | None:
        stmt = select(Folder).where(Folder.id == folder_id, Folder.project_id == project_id)
        return self.db.scalars(stmt).first()

    def get_folder_by_name(self, project_id: str, name: str) -> Folder | None:
        stmt = select(Folder).where(Folder.project_id == project_id, Folder.name == name)
        return self.db.scalars(stmt).first()

    def create_folder(self, folder: Folder) -> Folder:
        return self._add(folder)

    def delete_folder(self, folder: Folder) -> None:
        self.db.delete(folder)

    def get_next_sort_order(self, project_id: str, parent_id: str | None) -> int:
        stmt = select(func.max(Folder.sort_order)).where(Folder.project_id == project_id)
        if parent_id is None:
            stmt = stmt.where(Folder.parent_id.is_(None))
        else:
            stmt = stmt.where(Folder.parent_id == parent_id)
        current = self.db.scalar(stmt)
        return int(current) + 1 if current is not None else 0

    def list_descendant_ids(self, project_id: str, folder_id: str) -> list[str]:
        """Ids of every folder below ``folder_id`` (breadth first)."""
        stmt = select(Folder.id, Folder.parent_id).where(Folder.project_id == project_id)
        children: dict[str, list[str]] = {}
        for child_id, parent_id in self.db.execute(stmt).all():
            if parent_id is not None:
                children.setdefault(parent_id, []).append(child_id)
        found: list[str] = []
        queue = list(children.get(folder_id, []))
        while queue:
            current = queue.pop(0)
            if current in found:
                continue
            found.append(current)
            queue.extend(children.get(current, []))
        return found

    def set_folder_order(self, project_id: str, orders: list[tuple[str, int]]) -> None:
        for folder_id, order in orders:
            folder = self.get_folder(project_id, folder_id)
            if folder is None:
                raise ValueError(f"Folder not found: {folder_id}")
            folder.sort_order = order
