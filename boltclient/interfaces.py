#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Bus names and the static introspection data of boltd.

Proxies are built from these documents instead of introspecting
the daemon at run time. Keep in sync with org.freedesktop.bolt.xml.
"""

from dbus_fast.introspection import Node

BUS_NAME = "org.freedesktop.bolt"
MANAGER_PATH = "/org/freedesktop/bolt"

MANAGER_INTERFACE = "org.freedesktop.bolt1.Manager"
DEVICE_INTERFACE = "org.freedesktop.bolt1.Device"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

_PROPERTIES_XML = """
  <interface name="org.freedesktop.DBus.Properties">
    <method name="Get">
      <arg name="interface_name" type="s" direction="in"/>
      <arg name="property_name" type="s" direction="in"/>
      <arg name="value" type="v" direction="out"/>
    </method>
    <method name="GetAll">
      <arg name="interface_name" type="s" direction="in"/>
      <arg name="properties" type="a{sv}" direction="out"/>
    </method>
    <signal name="PropertiesChanged">
      <arg name="interface_name" type="s"/>
      <arg name="changed_properties" type="a{sv}"/>
      <arg name="invalidated_properties" type="as"/>
    </signal>
  </interface>
"""

MANAGER_XML = """
<node>
  <interface name="org.freedesktop.bolt1.Manager">
    <property name="Version" type="u" access="read"/>
    <property name="Probing" type="b" access="read"/>
    <method name="ListDevices">
      <arg name="devices" type="ao" direction="out"/>
    </method>
    <method name="DeviceByUid">
      <arg name="uid" type="s" direction="in"/>
      <arg name="device" type="o" direction="out"/>
    </method>
    <method name="EnrollDevice">
      <arg name="uid" type="s" direction="in"/>
      <arg name="policy" type="u" direction="in"/>
      <arg name="flags" type="u" direction="in"/>
      <arg name="device" type="o" direction="out"/>
    </method>
    <method name="ForgetDevice">
      <arg name="uid" type="s" direction="in"/>
    </method>
    <signal name="DeviceAdded">
      <arg name="device" type="o"/>
    </signal>
    <signal name="DeviceRemoved">
      <arg name="device" type="o"/>
    </signal>
  </interface>
%s
</node>
""" % _PROPERTIES_XML

DEVICE_XML = """
<node>
  <interface name="org.freedesktop.bolt1.Device">
    <property name="Uid" type="s" access="read"/>
    <property name="Name" type="s" access="read"/>
    <property name="Vendor" type="s" access="read"/>
    <property name="Status" type="u" access="read"/>
    <property name="SysfsPath" type="s" access="read"/>
    <property name="Security" type="u" access="read"/>
    <property name="Parent" type="s" access="read"/>
    <property name="Stored" type="b" access="read"/>
    <property name="Policy" type="u" access="read"/>
    <property name="Key" type="u" access="read"/>
    <method name="Authorize">
      <arg name="flags" type="u" direction="in"/>
    </method>
  </interface>
%s
</node>
""" % _PROPERTIES_XML

INTROSPECTION = {
    MANAGER_INTERFACE: Node.parse(MANAGER_XML),
    DEVICE_INTERFACE: Node.parse(DEVICE_XML),
}
