"""
Service lifecycle manager.

Drives a Service through create -> pull -> start -> (stop/restart)* -> remove
-> destroy, coordinating the record store and the container runtime.

Each mutating operation runs under a per-service-name lock and re-reads the
stored record before touching the container set, so concurrent callers
holding their own copies of the same service do not lose each other's
updates. Every operation mutates the container set first and persists last.

Collaborator failures are logged where they are detected and re-raised
unchanged. The only local recovery is in remove(): a container the runtime
no longer knows about counts as removed.
"""

import uuid
from typing import Dict, List, Optional

from ..core.context import LifecycleContext
from ..core.errors import (
    ContainerNotFound,
    DriverFailure,
    NotFound,
    RecordNotFound,
    StoreFailure,
)
from ..drivers.base import AuthConfig, ContainerSpec, HostConfig, ImageSpec, RestartPolicy
from ..models import DEFAULT_TAG, ContainerRef, Service, ServiceStatus


class ServiceLifecycleManager:
    """State transitions for services.

    Operations take the caller's Service entity and update it in place. A
    Service is not safe to share between threads; separate copies of the same
    service are, since the manager serializes work per service name.
    """

    def __init__(self, context: LifecycleContext):
        self.ctx = context
        self.logger = context.logger

    # ========== Persistence ==========

    def get(self, key: str, service: Optional[Service] = None) -> Service:
        """Load the record stored under ``key`` into ``service`` (or a new entity).

        Raises:
            RecordNotFound: no record for ``key``
            StoreFailure: the store could not be read or the record is corrupt
        """
        self.logger.info("Get service %s", key)
        try:
            record = self.ctx.store.read(key)
        except StoreFailure as e:
            self.logger.error("Failed to read service %s: %s", key, e)
            raise

        loaded = self._parse(key, record)
        if service is None:
            return loaded
        service.load(loaded)
        return service

    def update(self, service: Service) -> None:
        """Persist the full entity under its name."""
        self.logger.info("Update service %s", service.name)
        self._require_identity(service)
        with self.ctx.locks.hold(service.name):
            self._stored(service)
            self._write(service)

    def _write(self, service: Service) -> None:
        self._require_identity(service)
        try:
            self.ctx.store.write(service.name, service.to_record())
        except StoreFailure as e:
            self.logger.error("Failed to write service %s: %s", service.name, e)
            raise

    def _stored(self, service: Service) -> Optional[Service]:
        """Return the stored record for the entity, None if there is none.

        Raises NotFound when the stored record belongs to another identity.
        """
        try:
            record = self.ctx.store.read(service.name)
        except RecordNotFound:
            return None
        except StoreFailure as e:
            self.logger.error("Failed to read service %s: %s", service.name, e)
            raise

        stored = self._parse(service.name, record)
        if stored.uuid != service.uuid:
            raise NotFound(f"service {service.name} was recreated as {stored.uuid}")
        return stored

    def _refresh(self, service: Service) -> None:
        """Replace in-memory state with the stored record, if one exists."""
        stored = self._stored(service)
        if stored is None:
            self.logger.warning("No stored record for service %s, using in-memory state", service.name)
            return
        service.load(stored)

    def _parse(self, key: str, record) -> Service:
        try:
            return Service.from_record(record)
        except (ValueError, TypeError) as e:
            self.logger.error("Corrupt record for service %s: %s", key, e)
            raise StoreFailure(f"corrupt record {key}: {e}") from e

    @staticmethod
    def _require_identity(service: Service) -> None:
        if not service.exists:
            raise NotFound(f"service not found: {service.name or '<unnamed>'}")

    # ========== Lifecycle ==========

    def create(self, service: Service, name: str) -> Service:
        """Create a service record for ``name`` from its resolved definition.

        The entity is only updated once the record has been written; on
        failure it is left untouched.

        Raises:
            NotFound: ``name`` resolves to a configuration without an image
        """
        self.logger.info("Create service %s", name)

        created = Service(
            uuid=str(uuid.uuid4()),
            name=name,
            tag=DEFAULT_TAG,
            containers={},
            config=self.ctx.config_resolver.resolve(name),
            status=ServiceStatus.PENDING,
        )
        if not created.config.image:
            raise NotFound(f"service not found: {name}")

        with self.ctx.locks.hold(name):
            self._write(created)
        service.load(created)
        return service

    def pull(self, service: Service) -> None:
        """Pull the service image, then persist the record."""
        self.logger.info("Pull service %s image %s", service.name, service.config.image)
        self._require_identity(service)

        with self.ctx.locks.hold(service.name):
            self._refresh(service)
            if not service.config.image:
                raise NotFound(f"service {service.name} has no image")

            image = ImageSpec(name=service.config.image, auth=AuthConfig())
            try:
                self.ctx.driver.pull_image(image)
            except DriverFailure as e:
                self.logger.error("Failed to pull %s: %s", image.name, e)
                raise

            self._write(service)

    def start(self, service: Service) -> None:
        """Start every known container, or create one if there are none."""
        self.logger.info("Start service %s", service.name)
        self._require_identity(service)

        with self.ctx.locks.hold(service.name):
            self._refresh(service)
            host_config = self._host_config(service)

            # TODO: scale out to more than one container per service
            for ref in list(service.containers.values()):
                if not ref.id:
                    continue
                try:
                    self.ctx.driver.start_container(ref.id, host_config)
                except DriverFailure as e:
                    self.logger.error("Failed to start container %s: %s", ref.id, e)
                    raise

            self._ensure_container(service, host_config)
            service.status = ServiceStatus.RUNNING
            self._write(service)

    def stop(self, service: Service) -> None:
        """Stop every known container; the first failure aborts the rest."""
        self.logger.info("Stop service %s", service.name)
        self._require_identity(service)

        with self.ctx.locks.hold(service.name):
            self._refresh(service)

            for ref in list(service.containers.values()):
                if not ref.id:
                    continue
                try:
                    self.ctx.driver.stop_container(ref.id)
                except DriverFailure as e:
                    self.logger.error("Failed to stop container %s: %s", ref.id, e)
                    raise

            service.status = ServiceStatus.STOPPED
            self._write(service)

    def restart(self, service: Service) -> None:
        """Restart every known container, or create one if there are none."""
        self.logger.info("Restart service %s", service.name)
        self._require_identity(service)

        with self.ctx.locks.hold(service.name):
            self._refresh(service)
            host_config = self._host_config(service)

            for ref in list(service.containers.values()):
                if not ref.id:
                    continue
                try:
                    self.ctx.driver.restart_container(ref.id, host_config)
                except DriverFailure as e:
                    self.logger.error("Failed to restart container %s: %s", ref.id, e)
                    raise

            self._ensure_container(service, host_config)
            service.status = ServiceStatus.RUNNING
            self._write(service)

    def remove(self, service: Service) -> None:
        """Remove every container and clear the container set.

        Containers the runtime no longer has are dropped from the set. Any
        other failure aborts; containers not yet processed stay in the set
        and nothing is persisted.
        """
        self.logger.info("Remove service %s", service.name)
        self._require_identity(service)

        with self.ctx.locks.hold(service.name):
            self._refresh(service)

            for key, ref in list(service.containers.items()):
                if ref.id:
                    try:
                        self.ctx.driver.remove_container(ref.id)
                    except ContainerNotFound as e:
                        self.logger.warning("Container %s already gone, clearing it from %s: %s", ref.id, service.name, e)
                        del service.containers[key]
                        continue
                    except DriverFailure as e:
                        self.logger.error("Failed to remove container %s: %s", ref.id, e)
                        raise
                del service.containers[key]

            service.status = ServiceStatus.REMOVED
            self._write(service)

    def destroy(self, service: Service) -> None:
        """Remove all containers, then delete the record by identity.

        The entity keeps its identity afterwards and must not be reused.
        """
        self.logger.info("Destroy service %s", service.name)
        self._require_identity(service)

        with self.ctx.locks.hold(service.name):
            self.remove(service)
            try:
                self.ctx.store.remove(service.uuid)
            except StoreFailure as e:
                self.logger.error("Failed to delete service %s: %s", service.name, e)
                raise

    # ========== Ports ==========

    def ports(self, service: Service) -> int:
        """Return the first host port of the first container, 0 if none.

        Containers are inspected in identifier order; only the first one is
        looked at. Use port_map() to see every container's ports.
        """
        if not service.containers:
            return 0

        ids = sorted(ref.id for ref in service.containers.values() if ref.id)
        if not ids:
            return 0

        ports = self._inspect(ids[0])
        return ports[0] if ports else 0

    def port_map(self, service: Service) -> Dict[str, List[int]]:
        """Return host ports for every container of the service."""
        return {
            ref.id: self._inspect(ref.id)
            for _, ref in sorted(service.containers.items())
            if ref.id
        }

    def _inspect(self, container_id: str) -> List[int]:
        try:
            return self.ctx.driver.inspect_container(container_id)
        except DriverFailure as e:
            self.logger.error("Failed to inspect container %s: %s", container_id, e)
            raise

    # ========== Runtime parameters ==========

    def _host_config(self, service: Service) -> HostConfig:
        settings = self.ctx.settings
        return HostConfig(
            memory=service.config.memory,
            ports=list(service.config.ports),
            binds=list(service.config.volumes),
            privileged=False,
            restart_policy=RestartPolicy(
                name=settings.restart_policy_name,
                attempt=settings.restart_policy_attempts,
            ),
        )

    def _container_spec(self, service: Service) -> ContainerSpec:
        return ContainerSpec(
            image=service.config.image,
            memory=service.config.memory,
            ports=list(service.config.ports),
            volumes=list(service.config.volumes),
            env=dict(service.config.env),
        )

    def _ensure_container(self, service: Service, host_config: HostConfig) -> None:
        """Create one container while the service has none.

        Retries only when the runtime returns an empty identifier, and at
        most ``create_attempts`` times.
        """
        if service.containers:
            return
        if not service.config.image:
            raise NotFound(f"service {service.name} has no image")

        spec = self._container_spec(service)
        attempts = max(1, self.ctx.settings.create_attempts)
        for attempt in range(1, attempts + 1):
            try:
                container_id = self.ctx.driver.run_container(spec, host_config)
            except DriverFailure as e:
                self.logger.error("Failed to create container for %s: %s", service.name, e)
                raise

            if container_id:
                service.containers[container_id] = ContainerRef(id=container_id)
                return
            self.logger.warning("Runtime returned no container id for %s (attempt %d/%d)",
                                service.name, attempt, attempts)

        raise DriverFailure(f"runtime returned no container id for {service.name} "
                            f"after {attempts} attempts")
