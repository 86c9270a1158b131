from typing import Protocol
from dataclasses import dataclass


@dataclass
class UploadedAsset:
    url: str
    asset_id: str


class AssetHost(Protocol):
    def upload(self, image: str) -> UploadedAsset:
        ...

    def delete(self, asset_id: str) -> bool:
        ...
