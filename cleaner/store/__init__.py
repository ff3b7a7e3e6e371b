from cleaner.store.base import BaseJobStore
from cleaner.store.factory import JobStoreFactory
from cleaner.store.gitlab_adapter import GitLabJobStore
from cleaner.store.memory_adapter import InMemoryJobStore

__all__ = ["BaseJobStore", "GitLabJobStore", "InMemoryJobStore", "JobStoreFactory"]
