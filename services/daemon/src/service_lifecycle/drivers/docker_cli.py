"""
Docker runtime driver backed by the docker command line client.

Every operation shells out to ``docker`` and maps a nonzero exit status to
``DriverFailure``. Messages reporting a missing container are turned into
``ContainerNotFound`` here, so callers never inspect error text.
"""

import json
import logging
import subprocess
from typing import List, Optional

from ..core.errors import ContainerNotFound, DriverFailure
from .base import ContainerSpec, HostConfig, ImageSpec, RuntimeDriver

logger = logging.getLogger(__name__)

# Phrases the docker CLI prints when a container does not exist
MISSING_CONTAINER_MARKERS = ("No such container", "No such object")


class DockerCliDriver(RuntimeDriver):
    """Tiny wrapper around docker pull/run/start/stop/restart/rm/inspect."""

    def __init__(self, docker_binary: str = "docker"):
        self.docker_binary = docker_binary

    def _run(self, args: List[str], container_id: Optional[str] = None,
             stdin: Optional[str] = None) -> str:
        cmd = [self.docker_binary, *args]
        logger.debug("Running %s", " ".join(cmd[:2]))
        try:
            result = subprocess.run(cmd, input=stdin, capture_output=True, text=True, check=False)
        except OSError as e:
            raise DriverFailure(f"failed to execute {self.docker_binary}: {e}") from e

        if result.returncode != 0:
            message = (result.stderr or result.stdout or "").strip()
            if not message:
                message = f"docker {args[0]} exited with status {result.returncode}"
            if container_id and any(m in message for m in MISSING_CONTAINER_MARKERS):
                raise ContainerNotFound(message, container_id=container_id)
            raise DriverFailure(message)
        return result.stdout.strip()

    def pull_image(self, image: ImageSpec) -> None:
        if not image.auth.is_empty:
            login = ["login", "--username", image.auth.username, "--password-stdin"]
            if image.auth.registry:
                login.append(image.auth.registry)
            self._run(login, stdin=image.auth.password)
        self._run(["pull", image.name])
        logger.info("Pulled image %s", image.name)

    def _host_args(self, host_config: HostConfig) -> List[str]:
        policy = host_config.restart_policy
        # docker only accepts a retry count for on-failure
        restart = policy.name
        if policy.name == "on-failure" and policy.attempt:
            restart = f"{policy.name}:{policy.attempt}"

        args = ["--restart", restart]
        if host_config.memory:
            args += ["--memory", str(host_config.memory)]
        for port in host_config.ports:
            args += ["--publish", str(port)]
        for bind in host_config.binds:
            args += ["--volume", bind]
        if host_config.privileged:
            args.append("--privileged")
        return args

    def run_container(self, spec: ContainerSpec, host_config: HostConfig) -> str:
        args = ["run", "--detach", *self._host_args(host_config)]
        for port in spec.ports:
            if port not in host_config.ports:
                args += ["--expose", str(port)]
        for key, value in spec.env.items():
            args += ["--env", f"{key}={value}"]
        args.append(spec.image)

        output = self._run(args)
        # docker may print pull progress before the id
        container_id = output.splitlines()[-1].strip() if output else ""
        logger.info("Created container %s from %s", container_id[:12], spec.image)
        return container_id

    def start_container(self, container_id: str, host_config: HostConfig) -> None:
        # host config is fixed at creation for the CLI
        self._run(["start", container_id], container_id=container_id)

    def stop_container(self, container_id: str) -> None:
        self._run(["stop", container_id], container_id=container_id)

    def restart_container(self, container_id: str, host_config: HostConfig) -> None:
        self._run(["restart", container_id], container_id=container_id)

    def remove_container(self, container_id: str) -> None:
        self._run(["rm", "--force", container_id], container_id=container_id)

    def inspect_container(self, container_id: str) -> List[int]:
        output = self._run(
            ["inspect", "--type", "container", "--format", "{{json .NetworkSettings.Ports}}", container_id],
            container_id=container_id,
        )
        try:
            bindings = json.loads(output) if output else None
        except json.JSONDecodeError as e:
            raise DriverFailure(f"cannot parse port bindings for {container_id}: {output}") from e

        ports: List[int] = []
        for container_port in sorted(bindings or {}, key=lambda p: int(p.split("/", 1)[0])):
            for binding in bindings[container_port] or []:
                host_port = binding.get("HostPort")
                if host_port and int(host_port) not in ports:
                    ports.append(int(host_port))
        return ports
